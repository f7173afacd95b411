"""
TutorAid data models.

Usage:
    >>> from tutoraid.models import Student, Lesson, StudentName, Phone, ParentName
    >>> from tutoraid.models import LessonName, Capacity, Price
"""

from .fields import (
    EMPTY_PROGRESS,
    PAID,
    UNPAID,
    Capacity,
    LessonName,
    ParentName,
    PaymentStatus,
    Phone,
    Price,
    Progress,
    StudentName,
    Timing,
    format_price,
)
from .lesson import Lesson
from .result import CommandResult, ResultStatus
from .student import Student

__all__ = [
    "EMPTY_PROGRESS",
    "PAID",
    "UNPAID",
    "Capacity",
    "LessonName",
    "ParentName",
    "PaymentStatus",
    "Phone",
    "Price",
    "Progress",
    "StudentName",
    "Timing",
    "format_price",
    "Lesson",
    "CommandResult",
    "ResultStatus",
    "Student",
]
