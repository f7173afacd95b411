"""
Shared fixtures for TutorAid tests.
"""

import pytest

from tutoraid.models import (
    Capacity,
    Lesson,
    LessonName,
    ParentName,
    Phone,
    Price,
    Student,
    StudentName,
    Timing,
)


def build_student(name="Amy Tan", phone="91234567", parent_name="Bob Tan",
                  parent_phone="98765432", **kwargs):
    return Student(
        name=StudentName(name),
        phone=Phone(phone),
        parent_name=ParentName(parent_name),
        parent_phone=Phone(parent_phone),
        **kwargs
    )


def build_lesson(name="Math", capacity=None, price=None, timing=None, **kwargs):
    return Lesson(
        name=LessonName(name),
        capacity=Capacity(capacity) if capacity is not None else None,
        price=Price(price) if price is not None else None,
        timing=Timing(timing) if timing is not None else None,
        **kwargs
    )


@pytest.fixture
def make_student():
    """Factory for students with sensible defaults."""
    return build_student


@pytest.fixture
def make_lesson():
    """Factory for lessons with sensible defaults."""
    return build_lesson


@pytest.fixture
def amy():
    return build_student()


@pytest.fixture
def ben():
    return build_student("Ben Lim", "81112222", "Carol Lim", "82223333")


@pytest.fixture
def math():
    return build_lesson("Math", capacity="10", price="80", timing="Mon 1000-1200")


@pytest.fixture
def art():
    return build_lesson("Art", capacity="1", price="45.50")
