"""
Lesson record validator.

Validates a persisted lesson record, including the rule that a lesson
never holds more students than its capacity.
"""

from typing import Any, Dict

from ..models.fields import Capacity, LessonName, Price, StudentName, Timing
from .validators import ValidationResult, Validator


class LessonRecordValidator(Validator):
    """
    Validator for persisted lesson records.

    Only ``lessonName`` is required. Capacity, price and timing may be
    absent or an empty string, both meaning unset.
    """

    REQUIRED_FIELDS = ["lessonName"]

    OPTIONAL_TYPES = {
        "capacity": Capacity,
        "price": Price,
        "timing": Timing,
    }

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()

        if not isinstance(data, dict):
            return result.add_error(
                f"Lesson record must be an object, got {type(data).__name__}"
            )

        for name in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_missing(name)

        if not result.is_valid:
            return result

        error = self.validate_value(data["lessonName"], LessonName)
        if error:
            result.add_error(error, "lessonName")

        for name, value_type in self.OPTIONAL_TYPES.items():
            value = data.get(name)
            if value is None:
                continue
            error = self.validate_optional_value(value, value_type)
            if error:
                result.add_error(error, name)

        students = data.get("students")
        if students is None:
            return result

        error = self.validate_value_list(students, StudentName, "students")
        if error:
            return result.add_error(error, "students")

        for duplicate in self.find_duplicates(students):
            result.add_warning(f"Student listed twice: {duplicate}")

        # Business rule: enrolled students within capacity
        capacity = data.get("capacity")
        if "capacity" not in result.field_errors and capacity:
            enrolled = len(set(students))
            if enrolled > int(capacity):
                result.add_error(
                    f"Lesson {data['lessonName']} has {enrolled} students "
                    f"but a capacity of {capacity}",
                    "students"
                )

        return result
