"""
Lesson entity.

A lesson is identified by its name and lists its enrolled students by
name. Capacity, price and timing are optional; ``None`` means unset
and an unset capacity means the lesson is unbounded.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional

from .fields import Capacity, LessonName, Price, StudentName, Timing


@dataclass(frozen=True)
class Lesson:
    """
    Immutable lesson record.

    Attributes:
        name: Lesson name (identity)
        capacity: Maximum number of students, or None for unbounded
        price: Lesson price, or None if not set
        timing: Schedule text, or None if not set
        students: Names of the enrolled students

    Examples:
        >>> math = Lesson(LessonName("Math"), capacity=Capacity("1"))
        >>> math.is_full
        False
    """

    name: LessonName
    capacity: Optional[Capacity] = None
    price: Optional[Price] = None
    timing: Optional[Timing] = None
    students: FrozenSet[StudentName] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "students", frozenset(self.students))

    @property
    def key(self) -> str:
        """Identity key used by the lesson store."""
        return self.name.value

    @property
    def enrolled_count(self) -> int:
        return len(self.students)

    @property
    def is_full(self) -> bool:
        """True when a capacity is set and every place is taken."""
        if self.capacity is None:
            return False
        return self.enrolled_count >= self.capacity.limit

    def can_hold(self, count: int) -> bool:
        """Check whether ``count`` students fit within the capacity."""
        return self.capacity is None or count <= self.capacity.limit

    def has_student(self, student_name: StudentName) -> bool:
        return student_name in self.students

    def with_student(self, student_name: StudentName) -> "Lesson":
        return replace(self, students=self.students | {student_name})

    def without_student(self, student_name: StudentName) -> "Lesson":
        return replace(self, students=self.students - {student_name})

    def with_students(self, student_names: Iterable[StudentName]) -> "Lesson":
        return replace(self, students=frozenset(student_names))
