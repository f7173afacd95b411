"""
Student record validator.

Validates a persisted student record before it is turned back into
a Student.
"""

from typing import Any, Dict

from ..models.fields import LessonName, ParentName, Phone, Progress, StudentName
from .validators import ValidationResult, Validator


class StudentRecordValidator(Validator):
    """
    Validator for persisted student records.

    Validates:
    - Required fields (name, phone, parent name, parent phone)
    - Field formats, using each value type's own rule
    - Optional progress list, payment status and lesson names

    Examples:
        >>> validator = StudentRecordValidator()
        >>> record = {
        ...     "studentName": "Amy Tan",
        ...     "studentPhone": "91234567",
        ...     "parentName": "Bob Tan",
        ...     "parentPhone": "98765432",
        ...     "progressList": ["Chapter 2"],
        ...     "paymentStatus": False,
        ...     "lessons": ["Math"]
        ... }
        >>> validator.validate(record).is_valid
        True
    """

    REQUIRED_FIELDS = ["studentName", "studentPhone", "parentName", "parentPhone"]

    SCALAR_TYPES = {
        "studentName": StudentName,
        "studentPhone": Phone,
        "parentName": ParentName,
        "parentPhone": Phone,
    }

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate student record.

        Args:
            data: Student record dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        if not isinstance(data, dict):
            return result.add_error(
                f"Student record must be an object, got {type(data).__name__}"
            )

        for name in self.validate_required_fields(data, self.REQUIRED_FIELDS):
            result.add_missing(name)

        if not result.is_valid:
            return result

        for name, value_type in self.SCALAR_TYPES.items():
            error = self.validate_value(data[name], value_type)
            if error:
                result.add_error(error, name)

        progress_list = data.get("progressList")
        if progress_list is not None:
            error = self.validate_value_list(progress_list, Progress, "progressList")
            if error:
                result.add_error(error, "progressList")

        payment_status = data.get("paymentStatus")
        if payment_status is not None and not isinstance(payment_status, bool):
            result.add_error(
                f"paymentStatus must be true or false, got {payment_status!r}",
                "paymentStatus"
            )

        lessons = data.get("lessons")
        if lessons is not None:
            error = self.validate_value_list(lessons, LessonName, "lessons")
            if error:
                result.add_error(error, "lessons")
            else:
                for duplicate in self.find_duplicates(lessons):
                    result.add_warning(f"Lesson listed twice: {duplicate}")

        return result
