"""
Validators for persisted student and lesson records.
"""

from .lesson_validator import LessonRecordValidator
from .student_validator import StudentRecordValidator
from .validators import ValidationResult, Validator

__all__ = [
    "LessonRecordValidator",
    "StudentRecordValidator",
    "ValidationResult",
    "Validator",
]
