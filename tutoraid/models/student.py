"""
Student entity.

A student is identified by its full name. Enrolled lessons are held
as a set of lesson names; the matching lesson lists the student back
by name, and the two sides are kept in step by the enrollment
synchronizer rather than through shared objects.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Tuple

from ..exceptions import NoProgressError
from .fields import (
    EMPTY_PROGRESS,
    UNPAID,
    LessonName,
    ParentName,
    PaymentStatus,
    Phone,
    Progress,
    StudentName,
)


@dataclass(frozen=True)
class Student:
    """
    Immutable student record.

    Attributes:
        name: Student's full name (identity, case-sensitive)
        phone: Student's phone number
        parent_name: Parent's full name
        parent_phone: Parent's phone number
        progress_list: Progress entries, most recent first
        payment_status: Paid / not paid
        lessons: Names of the lessons the student is enrolled in

    Examples:
        >>> amy = Student(
        ...     name=StudentName("Amy Tan"),
        ...     phone=Phone("91234567"),
        ...     parent_name=ParentName("Bob Tan"),
        ...     parent_phone=Phone("98765432"),
        ... )
        >>> amy.current_progress
        Progress(value='No Progress')
    """

    name: StudentName
    phone: Phone
    parent_name: ParentName
    parent_phone: Phone
    progress_list: Tuple[Progress, ...] = ()
    payment_status: PaymentStatus = UNPAID
    lessons: FrozenSet[LessonName] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable from callers but store immutable containers
        object.__setattr__(self, "progress_list", tuple(self.progress_list))
        object.__setattr__(self, "lessons", frozenset(self.lessons))

    @property
    def key(self) -> str:
        """Identity key used by the student store."""
        return self.name.value

    @property
    def current_progress(self) -> Progress:
        if not self.progress_list:
            return EMPTY_PROGRESS
        return self.progress_list[0]

    def with_progress(self, progress: Progress) -> "Student":
        return replace(self, progress_list=(progress,) + self.progress_list)

    def without_latest_progress(self) -> "Student":
        """
        Drop the most recent progress entry.

        Raises:
            NoProgressError: If no progress has been recorded
        """
        if not self.progress_list:
            raise NoProgressError(f"{self.name} has no progress to delete")
        return replace(self, progress_list=self.progress_list[1:])

    def with_payment_status(self, status: PaymentStatus) -> "Student":
        return replace(self, payment_status=status)

    def is_enrolled_in(self, lesson_name: LessonName) -> bool:
        return lesson_name in self.lessons

    def with_lesson(self, lesson_name: LessonName) -> "Student":
        return replace(self, lessons=self.lessons | {lesson_name})

    def without_lesson(self, lesson_name: LessonName) -> "Student":
        return replace(self, lessons=self.lessons - {lesson_name})

    def with_lessons(self, lesson_names: Iterable[LessonName]) -> "Student":
        return replace(self, lessons=frozenset(lesson_names))
