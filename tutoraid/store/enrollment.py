"""
Enrollment synchronizer.

Students and lessons each record the other side of an enrollment by
name. This module is the only place that changes both sides, so the
two stores always agree: a student lists a lesson exactly when that
lesson lists the student.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Set, Tuple

from ..exceptions import AlreadyEnrolledError, CapacityExceededError, NotEnrolledError
from ..models.fields import LessonName, StudentName
from ..models.lesson import Lesson
from ..models.student import Student
from .entity_store import LessonStore, StudentStore


logger = logging.getLogger(__name__)


class EnrollmentSynchronizer:
    """
    Keeps the enrollment relationship consistent across both stores.

    Cascades always scan the full collections, never a filtered view,
    so hidden records cannot keep stale references.

    Examples:
        >>> sync = EnrollmentSynchronizer(students, lessons)
        >>> sync.enroll(amy, math)
        >>> sync.on_lesson_deleted(math)
        1
    """

    def __init__(self, students: StudentStore, lessons: LessonStore):
        self._students = students
        self._lessons = lessons

    def enroll(self, student: Student, lesson: Lesson) -> Tuple[Student, Lesson]:
        """
        Enroll a student in a lesson, updating both sides.

        Args:
            student: Student to enroll (looked up by name)
            lesson: Lesson to enroll into (looked up by name)

        Returns:
            The updated (student, lesson) pair as now stored

        Raises:
            EntityNotFoundError: If either entity is not stored
            AlreadyEnrolledError: If the enrollment already exists
            CapacityExceededError: If the lesson has no free place
        """
        current_student = self._students.get(student.key)
        current_lesson = self._lessons.get(lesson.key)

        if (current_lesson.has_student(current_student.name)
                or current_student.is_enrolled_in(current_lesson.name)):
            raise AlreadyEnrolledError(
                f"{current_student.name} is already enrolled in {current_lesson.name}"
            )
        if current_lesson.is_full:
            raise CapacityExceededError(
                f"{current_lesson.name} is full "
                f"({current_lesson.enrolled_count}/{current_lesson.capacity})"
            )

        updated_student = current_student.with_lesson(current_lesson.name)
        updated_lesson = current_lesson.with_student(current_student.name)
        self._students.replace(current_student, updated_student)
        self._lessons.replace(current_lesson, updated_lesson)
        logger.debug(f"Enrolled {current_student.name} in {current_lesson.name}")
        return updated_student, updated_lesson

    def unenroll(self, student: Student, lesson: Lesson) -> Tuple[Student, Lesson]:
        """
        Remove an enrollment from both sides.

        Raises:
            EntityNotFoundError: If either entity is not stored
            NotEnrolledError: If the student is not enrolled in the lesson
        """
        current_student = self._students.get(student.key)
        current_lesson = self._lessons.get(lesson.key)

        if not (current_lesson.has_student(current_student.name)
                or current_student.is_enrolled_in(current_lesson.name)):
            raise NotEnrolledError(
                f"{current_student.name} is not enrolled in {current_lesson.name}"
            )

        updated_student = current_student.without_lesson(current_lesson.name)
        updated_lesson = current_lesson.without_student(current_student.name)
        self._students.replace(current_student, updated_student)
        self._lessons.replace(current_lesson, updated_lesson)
        logger.debug(f"Unenrolled {current_student.name} from {current_lesson.name}")
        return updated_student, updated_lesson

    def on_lesson_deleted(self, lesson: Lesson) -> int:
        """
        Remove a deleted lesson from every student that lists it.

        Returns:
            Number of students updated
        """
        updated = 0
        for student in self._students.all():
            if student.is_enrolled_in(lesson.name):
                self._students.replace(student, student.without_lesson(lesson.name))
                updated += 1
        logger.debug(f"Cleared {lesson.name} from {updated} student(s)")
        return updated

    def on_student_deleted(self, student: Student) -> int:
        """
        Remove a deleted student from every lesson that lists them.

        Returns:
            Number of lessons updated
        """
        updated = 0
        for lesson in self._lessons.all():
            if lesson.has_student(student.name):
                self._lessons.replace(lesson, lesson.without_student(student.name))
                updated += 1
        logger.debug(f"Cleared {student.name} from {updated} lesson(s)")
        return updated

    def on_student_renamed(self, old_name: StudentName, new_name: StudentName) -> None:
        """Rewrite a student's name inside every lesson that lists it."""
        if old_name == new_name:
            return
        for lesson in self._lessons.all():
            if lesson.has_student(old_name):
                renamed = lesson.without_student(old_name).with_student(new_name)
                self._lessons.replace(lesson, renamed)

    def on_lesson_renamed(self, old_name: LessonName, new_name: LessonName) -> None:
        """Rewrite a lesson's name inside every student that lists it."""
        if old_name == new_name:
            return
        for student in self._students.all():
            if student.is_enrolled_in(old_name):
                renamed = student.without_lesson(old_name).with_lesson(new_name)
                self._students.replace(student, renamed)

    def synchronize(self) -> List[str]:
        """
        Reconcile both stores after they were loaded independently.

        Lesson student lists are authoritative: names that match no
        student are dropped, then every student's lesson set is derived
        from the lessons that list them.

        Returns:
            One message per reference that had to be dropped or added
        """
        repairs: List[str] = []
        known_students = {student.name for student in self._students.all()}

        for lesson in self._lessons.all():
            kept = {name for name in lesson.students if name in known_students}
            for dropped in sorted(lesson.students - kept, key=str):
                repairs.append(
                    f"Lesson {lesson.name} listed unknown student {dropped}; removed"
                )
            if kept != lesson.students:
                self._lessons.replace(lesson, lesson.with_students(kept))

        derived: Dict[StudentName, Set[LessonName]] = defaultdict(set)
        for lesson in self._lessons.all():
            for name in lesson.students:
                derived[name].add(lesson.name)

        for student in self._students.all():
            expected = frozenset(derived.get(student.name, ()))
            if student.lessons == expected:
                continue
            for extra in sorted(student.lessons - expected, key=str):
                repairs.append(
                    f"Student {student.name} listed {extra} which does not list them back; removed"
                )
            for missing in sorted(expected - student.lessons, key=str):
                repairs.append(
                    f"Student {student.name} was missing lesson {missing}; added"
                )
            self._students.replace(student, student.with_lessons(expected))

        for message in repairs:
            logger.warning(message)
        return repairs
