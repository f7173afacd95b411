"""
User commands executed against the ModelManager.

Each command is a small dataclass produced by the parser. ``execute``
either returns a successful CommandResult or raises a TutorAidError,
which the LogicManager turns into a failure result.

Indexes are 1-based positions in the list the user currently sees,
so they are resolved against the filtered views, not the stores.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence, TypeVar

from ..exceptions import EntityNotFoundError
from ..models.fields import (
    Capacity,
    LessonName,
    ParentName,
    Phone,
    Price,
    Progress,
    StudentName,
    Timing,
)
from ..models.lesson import Lesson
from ..models.result import CommandResult
from ..models.student import Student
from ..store.model_manager import ModelManager


T = TypeVar("T")

HELP_MESSAGE = """\
Commands:
  add -s sn/NAME sp/PHONE pn/PARENT_NAME pp/PARENT_PHONE
  add -l n/NAME [c/CAPACITY] [p/PRICE] [t/TIMING]
  add -sl s/STUDENT_INDEX l/LESSON_INDEX
  add -p STUDENT_INDEX PROGRESS
  del -s INDEX | del -l INDEX | del -p STUDENT_INDEX
  del -sl s/STUDENT_INDEX l/LESSON_INDEX
  edit -s INDEX [sn/NAME] [sp/PHONE] [pn/PARENT_NAME] [pp/PARENT_PHONE]
  edit -l INDEX [n/NAME] [c/CAPACITY] [p/PRICE] [t/TIMING]
  paid INDEX | unpaid INDEX
  view -s INDEX | view -l INDEX
  list | clear | help | exit"""


def resolve_index(items: Sequence[T], index: int, label: str) -> T:
    """
    Look up a displayed item by its 1-based index.

    Args:
        items: The filtered view the user is looking at
        index: 1-based position
        label: "student" or "lesson", used in the error message

    Raises:
        EntityNotFoundError: If the index is outside the view

    Examples:
        >>> resolve_index(("Math", "Art"), 2, "lesson")
        'Art'
    """
    if index < 1 or index > len(items):
        raise EntityNotFoundError(f"The {label} index provided is invalid: {index}")
    return items[index - 1]


class Command(ABC):
    """Base class for every user command."""

    COMMAND_WORD: ClassVar[str] = ""
    MUTATES: ClassVar[bool] = True

    @abstractmethod
    def execute(self, model: ModelManager) -> CommandResult:
        """
        Run the command.

        Args:
            model: Model to act on

        Returns:
            Successful CommandResult with user feedback

        Raises:
            TutorAidError: If the command cannot be carried out
        """
        pass


# ----- students ---------------------------------------------------------


@dataclass
class AddStudentCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add -s"

    student: Student

    def execute(self, model: ModelManager) -> CommandResult:
        added = model.add_student(self.student)
        return CommandResult.success(f"New student added: {added.name}")


@dataclass
class DeleteStudentCommand(Command):
    COMMAND_WORD: ClassVar[str] = "del -s"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        removed = model.delete_student(target)
        return CommandResult.success(f"Deleted student: {removed.name}")


@dataclass
class EditStudentDescriptor:
    """Fields to change on a student; None means unchanged."""

    name: Optional[StudentName] = None
    phone: Optional[Phone] = None
    parent_name: Optional[ParentName] = None
    parent_phone: Optional[Phone] = None

    @property
    def is_any_field_edited(self) -> bool:
        return any(
            value is not None
            for value in (self.name, self.phone, self.parent_name, self.parent_phone)
        )

    def apply(self, student: Student) -> Student:
        return Student(
            name=self.name or student.name,
            phone=self.phone or student.phone,
            parent_name=self.parent_name or student.parent_name,
            parent_phone=self.parent_phone or student.parent_phone,
            progress_list=student.progress_list,
            payment_status=student.payment_status,
            lessons=student.lessons,
        )


@dataclass
class EditStudentCommand(Command):
    COMMAND_WORD: ClassVar[str] = "edit -s"

    index: int
    descriptor: EditStudentDescriptor

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        edited = model.set_student(target, self.descriptor.apply(target))
        return CommandResult.success(f"Edited student: {edited.name}")


@dataclass
class AddProgressCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add -p"

    index: int
    progress: Progress

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        updated = model.add_progress(target, self.progress)
        return CommandResult.success(f"Added progress for {updated.name}: {self.progress}")


@dataclass
class DeleteProgressCommand(Command):
    COMMAND_WORD: ClassVar[str] = "del -p"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        updated, removed = model.delete_latest_progress(target)
        return CommandResult.success(f"Deleted latest progress for {updated.name}: {removed}")


@dataclass
class PaidCommand(Command):
    COMMAND_WORD: ClassVar[str] = "paid"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        updated = model.mark_paid(target)
        return CommandResult.success(f"Marked {updated.name} as paid")


@dataclass
class UnpaidCommand(Command):
    COMMAND_WORD: ClassVar[str] = "unpaid"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        updated = model.mark_unpaid(target)
        return CommandResult.success(f"Marked {updated.name} as not paid")


# ----- lessons ----------------------------------------------------------


@dataclass
class AddLessonCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add -l"

    lesson: Lesson

    def execute(self, model: ModelManager) -> CommandResult:
        added = model.add_lesson(self.lesson)
        return CommandResult.success(f"New lesson added: {added.name}")


@dataclass
class DeleteLessonCommand(Command):
    COMMAND_WORD: ClassVar[str] = "del -l"

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_lessons, self.index, "lesson")
        removed = model.delete_lesson(target)
        return CommandResult.success(f"Deleted lesson: {removed.name}")


@dataclass
class EditLessonDescriptor:
    """Fields to change on a lesson; None means unchanged."""

    name: Optional[LessonName] = None
    capacity: Optional[Capacity] = None
    price: Optional[Price] = None
    timing: Optional[Timing] = None

    @property
    def is_any_field_edited(self) -> bool:
        return any(
            value is not None
            for value in (self.name, self.capacity, self.price, self.timing)
        )

    def apply(self, lesson: Lesson) -> Lesson:
        return Lesson(
            name=self.name or lesson.name,
            capacity=self.capacity or lesson.capacity,
            price=self.price or lesson.price,
            timing=self.timing or lesson.timing,
            students=lesson.students,
        )


@dataclass
class EditLessonCommand(Command):
    COMMAND_WORD: ClassVar[str] = "edit -l"

    index: int
    descriptor: EditLessonDescriptor

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_lessons, self.index, "lesson")
        edited = model.set_lesson(target, self.descriptor.apply(target))
        return CommandResult.success(f"Edited lesson: {edited.name}")


# ----- enrollment -------------------------------------------------------


@dataclass
class EnrollCommand(Command):
    COMMAND_WORD: ClassVar[str] = "add -sl"

    student_index: int
    lesson_index: int

    def execute(self, model: ModelManager) -> CommandResult:
        student = resolve_index(model.filtered_students, self.student_index, "student")
        lesson = resolve_index(model.filtered_lessons, self.lesson_index, "lesson")
        student, lesson = model.enroll(student, lesson)
        return CommandResult.success(f"Enrolled {student.name} in {lesson.name}")


@dataclass
class UnenrollCommand(Command):
    COMMAND_WORD: ClassVar[str] = "del -sl"

    student_index: int
    lesson_index: int

    def execute(self, model: ModelManager) -> CommandResult:
        student = resolve_index(model.filtered_students, self.student_index, "student")
        lesson = resolve_index(model.filtered_lessons, self.lesson_index, "lesson")
        student, lesson = model.unenroll(student, lesson)
        return CommandResult.success(f"Removed {student.name} from {lesson.name}")


# ----- views and housekeeping -------------------------------------------


@dataclass
class ViewStudentCommand(Command):
    COMMAND_WORD: ClassVar[str] = "view -s"
    MUTATES: ClassVar[bool] = False

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_students, self.index, "student")
        model.view_student(target)
        return CommandResult.success(f"Viewing student: {target.name}")


@dataclass
class ViewLessonCommand(Command):
    COMMAND_WORD: ClassVar[str] = "view -l"
    MUTATES: ClassVar[bool] = False

    index: int

    def execute(self, model: ModelManager) -> CommandResult:
        target = resolve_index(model.filtered_lessons, self.index, "lesson")
        model.view_lesson(target)
        return CommandResult.success(f"Viewing lesson: {target.name}")


@dataclass
class ListCommand(Command):
    COMMAND_WORD: ClassVar[str] = "list"
    MUTATES: ClassVar[bool] = False

    def execute(self, model: ModelManager) -> CommandResult:
        model.view_all()
        return CommandResult.success("Listed all students and lessons")


@dataclass
class ClearCommand(Command):
    COMMAND_WORD: ClassVar[str] = "clear"

    def execute(self, model: ModelManager) -> CommandResult:
        model.clear()
        return CommandResult.success("TutorAid has been cleared!")


@dataclass
class HelpCommand(Command):
    COMMAND_WORD: ClassVar[str] = "help"
    MUTATES: ClassVar[bool] = False

    def execute(self, model: ModelManager) -> CommandResult:
        return CommandResult.success(HELP_MESSAGE, show_help=True)


@dataclass
class ExitCommand(Command):
    COMMAND_WORD: ClassVar[str] = "exit"
    MUTATES: ClassVar[bool] = False

    def execute(self, model: ModelManager) -> CommandResult:
        return CommandResult.success("Exiting TutorAid as requested ...", should_exit=True)
