"""
Persistence codec between the model and JSON records.

Each store is encoded on its own. Relationships are written as lists
of names, never as nested records, so the student and lesson files do
not refer to each other's structure. Decoding validates every field
with the same rules the value types enforce and never coerces bad data.

Record shapes:
    Student: {"studentName", "studentPhone", "parentName", "parentPhone",
              "progressList", "paymentStatus", "lessons"}
    Lesson:  {"lessonName", "capacity", "price", "students", "timing"}
"""

import logging
from typing import Any, Dict, Iterable, List, Sequence

from ..exceptions import DataConversionError, InvalidFieldError, MissingFieldError
from ..models.fields import (
    Capacity,
    LessonName,
    ParentName,
    PaymentStatus,
    Phone,
    Price,
    Progress,
    StudentName,
    Timing,
)
from ..models.lesson import Lesson
from ..models.student import Student
from ..validation import LessonRecordValidator, StudentRecordValidator, ValidationResult


logger = logging.getLogger(__name__)

STUDENT_RECORD = "Student"
LESSON_RECORD = "Lesson"

_student_validator = StudentRecordValidator()
_lesson_validator = LessonRecordValidator()


def _ordered_names(names: Iterable[Any], order: Sequence[str]) -> List[str]:
    """Sort name values by their position in ``order``; unknown names go last, alphabetically."""
    position = {name: index for index, name in enumerate(order)}
    values = [str(name) for name in names]
    return sorted(values, key=lambda value: (position.get(value, len(position)), value))


def _raise_for(result: ValidationResult, record_type: str) -> None:
    for warning in result.warnings:
        logger.warning(f"{record_type} record: {warning}")

    if result.missing_fields:
        raise MissingFieldError(record_type, result.missing_fields[0])

    error = result.first_error()
    if error is not None:
        raise InvalidFieldError(record_type, *error)


def encode_student(student: Student, lesson_order: Sequence[str] = ()) -> Dict[str, Any]:
    """
    Convert a Student to a JSON record.

    Args:
        student: Student to encode
        lesson_order: Lesson names in store order, used to order ``lessons``

    Returns:
        Student record dictionary
    """
    return {
        "studentName": student.name.value,
        "studentPhone": student.phone.value,
        "parentName": student.parent_name.value,
        "parentPhone": student.parent_phone.value,
        "progressList": [progress.value for progress in student.progress_list],
        "paymentStatus": student.payment_status.has_paid,
        "lessons": _ordered_names(student.lessons, lesson_order),
    }


def decode_student(record: Dict[str, Any]) -> Student:
    """
    Convert a JSON record back into a Student.

    Raises:
        MissingFieldError: If a required field is absent
        InvalidFieldError: If a field fails its value type's rule
    """
    _raise_for(_student_validator.validate(record), STUDENT_RECORD)

    return Student(
        name=StudentName(record["studentName"]),
        phone=Phone(record["studentPhone"]),
        parent_name=ParentName(record["parentName"]),
        parent_phone=Phone(record["parentPhone"]),
        progress_list=tuple(Progress(text) for text in record.get("progressList") or []),
        payment_status=PaymentStatus(bool(record.get("paymentStatus") or False)),
        lessons=frozenset(LessonName(name) for name in record.get("lessons") or []),
    )


def encode_lesson(lesson: Lesson, student_order: Sequence[str] = ()) -> Dict[str, Any]:
    """
    Convert a Lesson to a JSON record; unset optional fields become ``""``.

    Args:
        lesson: Lesson to encode
        student_order: Student names in store order, used to order ``students``
    """
    return {
        "lessonName": lesson.name.value,
        "capacity": lesson.capacity.value if lesson.capacity else "",
        "price": lesson.price.value if lesson.price else "",
        "students": _ordered_names(lesson.students, student_order),
        "timing": lesson.timing.value if lesson.timing else "",
    }


def decode_lesson(record: Dict[str, Any]) -> Lesson:
    """
    Convert a JSON record back into a Lesson.

    Raises:
        MissingFieldError: If ``lessonName`` is absent
        InvalidFieldError: If a field is invalid or students exceed capacity
    """
    _raise_for(_lesson_validator.validate(record), LESSON_RECORD)

    capacity = record.get("capacity") or ""
    price = record.get("price") or ""
    timing = record.get("timing") or ""
    return Lesson(
        name=LessonName(record["lessonName"]),
        capacity=Capacity(capacity) if capacity else None,
        price=Price(price) if price else None,
        timing=Timing(timing) if timing else None,
        students=frozenset(StudentName(name) for name in record.get("students") or []),
    )


def encode_students(students: Iterable[Student], lesson_order: Sequence[str] = ()) -> Dict[str, Any]:
    """Encode a whole student store."""
    return {"students": [encode_student(student, lesson_order) for student in students]}


def encode_lessons(lessons: Iterable[Lesson], student_order: Sequence[str] = ()) -> Dict[str, Any]:
    """Encode a whole lesson store."""
    return {"lessons": [encode_lesson(lesson, student_order) for lesson in lessons]}


def _records(data: Any, key: str) -> List[Any]:
    if not isinstance(data, dict) or key not in data:
        raise DataConversionError(f"Data file must be an object with a '{key}' list")
    records = data[key]
    if not isinstance(records, list):
        raise DataConversionError(f"'{key}' must be a list, got {type(records).__name__}")
    return records


def _reject_duplicates(names: List[str], label: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise DataConversionError(f"Duplicate {label} name: {name}")
        seen.add(name)


def decode_students(data: Any) -> List[Student]:
    """
    Decode a whole student store.

    Raises:
        DataConversionError: If the structure, any record, or name uniqueness is invalid
    """
    students = [decode_student(record) for record in _records(data, "students")]
    _reject_duplicates([student.key for student in students], "student")
    return students


def decode_lessons(data: Any) -> List[Lesson]:
    """
    Decode a whole lesson store.

    Raises:
        DataConversionError: If the structure, any record, or name uniqueness is invalid
    """
    lessons = [decode_lesson(record) for record in _records(data, "lessons")]
    _reject_duplicates([lesson.key for lesson in lessons], "lesson")
    return lessons
