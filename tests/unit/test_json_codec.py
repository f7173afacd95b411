"""
Unit tests for the JSON persistence codec.
"""

import pytest

from tutoraid.exceptions import DataConversionError, InvalidFieldError, MissingFieldError
from tutoraid.models import PAID, LessonName, Phone, Progress
from tutoraid.storage import (
    decode_lesson,
    decode_lessons,
    decode_student,
    decode_students,
    encode_lesson,
    encode_lessons,
    encode_student,
    encode_students,
)


@pytest.fixture
def student_record():
    return {
        "studentName": "Amy Tan",
        "studentPhone": "91234567",
        "parentName": "Bob Tan",
        "parentPhone": "98765432",
        "progressList": ["Chapter 2", "Chapter 1"],
        "paymentStatus": True,
        "lessons": ["Math"],
    }


@pytest.fixture
def lesson_record():
    return {
        "lessonName": "Math",
        "capacity": "10",
        "price": "80.00",
        "students": ["Amy Tan"],
        "timing": "Mon 1000-1200",
    }


class TestStudentCodec:
    """Test cases for student records."""

    def test_decode(self, student_record):
        """Test a complete record decodes to the matching student."""
        student = decode_student(student_record)

        assert student.key == "Amy Tan"
        assert student.phone == Phone("91234567")
        assert student.current_progress == Progress("Chapter 2")
        assert student.payment_status == PAID
        assert student.lessons == frozenset({LessonName("Math")})

    def test_round_trip(self, student_record):
        """Test encode(decode(record)) gives back the record."""
        assert encode_student(decode_student(student_record)) == student_record

    def test_optional_collections(self, student_record):
        """Test progress, payment and lessons may be absent."""
        for key in ("progressList", "paymentStatus", "lessons"):
            del student_record[key]

        student = decode_student(student_record)

        assert student.progress_list == ()
        assert not student.payment_status.has_paid
        assert student.lessons == frozenset()

    @pytest.mark.parametrize("field_name", [
        "studentName", "studentPhone", "parentName", "parentPhone",
    ])
    def test_missing_required_field(self, student_record, field_name):
        """Test each required field is reported by name."""
        del student_record[field_name]

        with pytest.raises(MissingFieldError) as exc_info:
            decode_student(student_record)

        assert exc_info.value.field_name == field_name
        assert exc_info.value.message == f"Student's {field_name} field is missing!"

    def test_invalid_phone(self, student_record):
        """Test an invalid field uses the value type's constraint message."""
        student_record["studentPhone"] = "91-234"

        with pytest.raises(InvalidFieldError) as exc_info:
            decode_student(student_record)

        assert exc_info.value.field_name == "studentPhone"
        assert exc_info.value.message == Phone.MESSAGE_CONSTRAINTS

    def test_payment_status_not_coerced(self, student_record):
        """Test a string payment status is rejected."""
        student_record["paymentStatus"] = "true"

        with pytest.raises(InvalidFieldError):
            decode_student(student_record)

    def test_lessons_written_in_store_order(self, student_record):
        """Test lesson names follow the given lesson order."""
        student_record["lessons"] = ["Art", "Math", "Chess"]
        student = decode_student(student_record)

        encoded = encode_student(student, lesson_order=["Math", "Chess", "Art"])

        assert encoded["lessons"] == ["Math", "Chess", "Art"]


class TestLessonCodec:
    """Test cases for lesson records."""

    def test_round_trip(self, lesson_record):
        """Test encode(decode(record)) gives back the record."""
        assert encode_lesson(decode_lesson(lesson_record)) == lesson_record

    def test_empty_optional_fields(self):
        """Test empty strings and absent keys both mean unset."""
        lesson = decode_lesson({"lessonName": "Chess", "capacity": "", "price": ""})

        assert lesson.capacity is None
        assert lesson.price is None
        assert lesson.timing is None
        assert encode_lesson(lesson) == {
            "lessonName": "Chess",
            "capacity": "",
            "price": "",
            "students": [],
            "timing": "",
        }

    def test_missing_name(self, lesson_record):
        """Test the lesson name is required."""
        del lesson_record["lessonName"]

        with pytest.raises(MissingFieldError) as exc_info:
            decode_lesson(lesson_record)

        assert exc_info.value.message == "Lesson's lessonName field is missing!"

    def test_invalid_price(self, lesson_record):
        """Test a malformed price."""
        lesson_record["price"] = "80.5"

        with pytest.raises(InvalidFieldError) as exc_info:
            decode_lesson(lesson_record)

        assert exc_info.value.field_name == "price"

    def test_students_over_capacity(self, lesson_record):
        """Test more students than capacity is rejected."""
        lesson_record["capacity"] = "1"
        lesson_record["students"] = ["Amy Tan", "Ben Lim"]

        with pytest.raises(InvalidFieldError) as exc_info:
            decode_lesson(lesson_record)

        assert exc_info.value.field_name == "students"


class TestStoreCodec:
    """Test cases for whole-store documents."""

    def test_round_trip(self, student_record, lesson_record):
        """Test stores survive encode and decode unchanged."""
        students = decode_students({"students": [student_record]})
        lessons = decode_lessons({"lessons": [lesson_record]})

        assert decode_students(encode_students(students)) == students
        assert decode_lessons(encode_lessons(lessons)) == lessons

    def test_empty_store(self):
        """Test an empty list decodes to no entities."""
        assert decode_students({"students": []}) == []

    @pytest.mark.parametrize("data", [[], {"lessons": []}, {"students": {}}, None])
    def test_bad_structure(self, data):
        """Test documents without a students list."""
        with pytest.raises(DataConversionError):
            decode_students(data)

    def test_duplicate_names(self, lesson_record):
        """Test two lessons with the same name abort the load."""
        with pytest.raises(DataConversionError):
            decode_lessons({"lessons": [lesson_record, dict(lesson_record)]})

    def test_one_bad_record_aborts_file(self, student_record):
        """Test a single invalid record fails the whole document."""
        bad = dict(student_record, studentName="Ben Lim", parentPhone="")

        with pytest.raises(DataConversionError):
            decode_students({"students": [student_record, bad]})
