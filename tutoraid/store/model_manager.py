"""
In-memory model of TutorAid.

ModelManager composes the student and lesson stores, routes every
mutation through the enrollment synchronizer, and exposes one live
filtered view per collection for the presentation layer.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from ..exceptions import CapacityExceededError
from ..models.fields import PAID, UNPAID, LessonName, Progress, StudentName
from ..models.lesson import Lesson
from ..models.student import Student
from .enrollment import EnrollmentSynchronizer
from .entity_store import LessonStore, StudentStore
from .filtered_view import FilteredView, Predicate, show_all


logger = logging.getLogger(__name__)


class ModelManager:
    """
    Owner of both stores and their filtered views.

    Only this class holds writable references to the stores; callers
    receive entities (immutable) and views (read-only).

    Examples:
        >>> model = ModelManager()
        >>> model.add_student(amy)
        >>> model.add_lesson(math)
        >>> model.enroll(amy, math)
        >>> model.view_student(amy)
        >>> [lesson.key for lesson in model.filtered_lessons]
        ['Math']
    """

    def __init__(self, students: Iterable[Student] = (), lessons: Iterable[Lesson] = ()):
        self._students = StudentStore()
        self._lessons = LessonStore()
        self._sync = EnrollmentSynchronizer(self._students, self._lessons)
        self._filtered_students: FilteredView[Student] = FilteredView(self._students.all)
        self._filtered_lessons: FilteredView[Lesson] = FilteredView(self._lessons.all)
        # Name of the student or lesson the views are focused on, if any
        self._focus: Optional[Union[StudentName, LessonName]] = None
        self.reset_data(students, lessons)

    # ----- reads -------------------------------------------------------

    @property
    def filtered_students(self) -> FilteredView[Student]:
        return self._filtered_students

    @property
    def filtered_lessons(self) -> FilteredView[Lesson]:
        return self._filtered_lessons

    def students(self) -> Tuple[Student, ...]:
        """Every student, ignoring the current filter."""
        return self._students.all()

    def lessons(self) -> Tuple[Lesson, ...]:
        """Every lesson, ignoring the current filter."""
        return self._lessons.all()

    def has_student(self, student: Student) -> bool:
        return self._students.contains(student)

    def has_lesson(self, lesson: Lesson) -> bool:
        return self._lessons.contains(lesson)

    def get_student(self, name: str) -> Student:
        return self._students.get(name)

    def get_lesson(self, name: str) -> Lesson:
        return self._lessons.get(name)

    def lessons_of(self, student: Student) -> Tuple[Lesson, ...]:
        """Lessons the student is enrolled in, in lesson store order."""
        current = self._students.get(student.key)
        return tuple(
            lesson for lesson in self._lessons.all()
            if current.is_enrolled_in(lesson.name)
        )

    def students_of(self, lesson: Lesson) -> Tuple[Student, ...]:
        """Students enrolled in the lesson, in student store order."""
        current = self._lessons.get(lesson.key)
        return tuple(
            student for student in self._students.all()
            if current.has_student(student.name)
        )

    # ----- whole-model operations ---------------------------------------

    def reset_data(self, students: Iterable[Student], lessons: Iterable[Lesson]) -> List[str]:
        """
        Replace both collections and reconcile their enrollments.

        Args:
            students: Students to hold (e.g. freshly loaded from disk)
            lessons: Lessons to hold

        Returns:
            Repair messages from the synchronizer

        Raises:
            DuplicateEntityError: If either collection repeats a name
        """
        students = list(students)
        lessons = list(lessons)
        fresh_students = StudentStore(students)
        fresh_lessons = LessonStore(lessons)
        self._students.reset(fresh_students.all())
        self._lessons.reset(fresh_lessons.all())
        repairs = self._sync.synchronize()
        self.view_all()
        return repairs

    def clear(self) -> None:
        """Delete every student and lesson."""
        self._students.reset(())
        self._lessons.reset(())
        logger.info("Cleared all students and lessons")
        self.view_all()

    # ----- students ----------------------------------------------------

    def add_student(self, student: Student) -> Student:
        """
        Add a new student with no enrollments and show the full list.

        Enrollments are only created through ``enroll``; any lesson
        names carried by ``student`` are discarded.
        """
        student = student.with_lessons(())
        self._students.add(student)
        self.update_filtered_student_list(show_all)
        return student

    def delete_student(self, student: Student) -> Student:
        """Delete a student and remove them from every lesson."""
        removed = self._students.remove(student)
        self._sync.on_student_deleted(removed)
        self._refresh()
        return removed

    def set_student(self, target: Student, edited: Student) -> Student:
        """
        Replace a student with an edited version.

        The stored enrollment set is carried over; a rename is written
        through to every lesson that lists the student.
        """
        current = self._students.get(target.key)
        edited = edited.with_lessons(current.lessons)
        self._students.replace(current, edited)
        self._sync.on_student_renamed(current.name, edited.name)
        self._refocus(current.name, edited)
        return edited

    def add_progress(self, student: Student, progress: Progress) -> Student:
        current = self._students.get(student.key)
        return self._replace_student(current, current.with_progress(progress))

    def delete_latest_progress(self, student: Student) -> Tuple[Student, Progress]:
        """Remove a student's latest progress and return it with the student."""
        current = self._students.get(student.key)
        updated = current.without_latest_progress()
        return self._replace_student(current, updated), current.current_progress

    def mark_paid(self, student: Student) -> Student:
        current = self._students.get(student.key)
        return self._replace_student(current, current.with_payment_status(PAID))

    def mark_unpaid(self, student: Student) -> Student:
        current = self._students.get(student.key)
        return self._replace_student(current, current.with_payment_status(UNPAID))

    def _replace_student(self, current: Student, updated: Student) -> Student:
        self._students.replace(current, updated)
        self._refresh()
        return updated

    # ----- lessons -----------------------------------------------------

    def add_lesson(self, lesson: Lesson) -> Lesson:
        """Add a new lesson with no students and show the full list."""
        lesson = lesson.with_students(())
        self._lessons.add(lesson)
        self.update_filtered_lesson_list(show_all)
        return lesson

    def delete_lesson(self, lesson: Lesson) -> Lesson:
        """Delete a lesson and remove it from every student."""
        removed = self._lessons.remove(lesson)
        self._sync.on_lesson_deleted(removed)
        self._refresh()
        return removed

    def set_lesson(self, target: Lesson, edited: Lesson) -> Lesson:
        """
        Replace a lesson with an edited version.

        Raises:
            CapacityExceededError: If the new capacity is below the
                number of students already enrolled
        """
        current = self._lessons.get(target.key)
        edited = edited.with_students(current.students)
        if not edited.can_hold(current.enrolled_count):
            raise CapacityExceededError(
                f"{current.name} already has {current.enrolled_count} students; "
                f"capacity {edited.capacity} is too small"
            )
        self._lessons.replace(current, edited)
        self._sync.on_lesson_renamed(current.name, edited.name)
        self._refocus(current.name, edited)
        return edited

    # ----- enrollment --------------------------------------------------

    def enroll(self, student: Student, lesson: Lesson) -> Tuple[Student, Lesson]:
        result = self._sync.enroll(student, lesson)
        self._refresh()
        return result

    def unenroll(self, student: Student, lesson: Lesson) -> Tuple[Student, Lesson]:
        result = self._sync.unenroll(student, lesson)
        self._refresh()
        return result

    # ----- filtering ---------------------------------------------------

    def update_filtered_student_list(self, predicate: Predicate) -> None:
        self._focus = None
        self._filtered_students.set_predicate(predicate)

    def update_filtered_lesson_list(self, predicate: Predicate) -> None:
        self._focus = None
        self._filtered_lessons.set_predicate(predicate)

    def view_student(self, student: Student) -> None:
        """Show only this student and the lessons they are enrolled in."""
        name = self._students.get(student.key).name
        self.update_filtered_student_list(lambda other: other.name == name)
        self.update_filtered_lesson_list(lambda lesson: lesson.has_student(name))
        self._focus = name

    def view_lesson(self, lesson: Lesson) -> None:
        """Show only this lesson and the students enrolled in it."""
        name = self._lessons.get(lesson.key).name
        self.update_filtered_lesson_list(lambda other: other.name == name)
        self.update_filtered_student_list(lambda student: student.is_enrolled_in(name))
        self._focus = name

    def view_all(self) -> None:
        """Reset both filters to show everything."""
        self.update_filtered_student_list(show_all)
        self.update_filtered_lesson_list(show_all)

    list_all = view_all

    def _refocus(self, old_name, edited) -> None:
        """Keep a student or lesson view on its entity across a rename."""
        if self._focus == old_name and edited.name != old_name:
            if isinstance(edited, Student):
                self.view_student(edited)
            else:
                self.view_lesson(edited)
        else:
            self._refresh()

    def _refresh(self) -> None:
        # Called after the synchronizer so views never see half-applied changes
        self._filtered_students.refresh()
        self._filtered_lessons.refresh()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModelManager):
            return NotImplemented
        return (
            self._students == other._students
            and self._lessons == other._lessons
            and self._filtered_students.items() == other._filtered_students.items()
            and self._filtered_lessons.items() == other._filtered_lessons.items()
        )
