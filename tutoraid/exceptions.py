"""
Exception hierarchy for TutorAid.

Every error raised by the model, storage and command layers derives
from TutorAidError so the command loop can turn any of them into a
failure result with a readable message.
"""

from typing import Any, Dict, Optional


class TutorAidError(Exception):
    """Base exception for all TutorAid errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TutorAidError):
    """Raised when a value does not satisfy its format rule."""


class DuplicateEntityError(TutorAidError):
    """Raised when a student or lesson with the same name already exists."""


class EntityNotFoundError(TutorAidError):
    """Raised when a student or lesson cannot be found."""


class AlreadyEnrolledError(TutorAidError):
    """Raised when a student is already enrolled in a lesson."""


class NotEnrolledError(TutorAidError):
    """Raised when a student is not enrolled in a lesson."""


class CapacityExceededError(TutorAidError):
    """Raised when a lesson has no free places left."""


class NoProgressError(TutorAidError):
    """Raised when deleting progress from a student without any."""


class DataConversionError(TutorAidError):
    """Raised when persisted data cannot be turned back into the model."""


class MissingFieldError(DataConversionError):
    """Raised when a persisted record lacks a required field."""

    def __init__(self, record_type: str, field_name: str):
        super().__init__(
            f"{record_type}'s {field_name} field is missing!",
            {"record_type": record_type, "field": field_name},
        )
        self.record_type = record_type
        self.field_name = field_name


class InvalidFieldError(DataConversionError):
    """Raised when a persisted field fails its value type's validation."""

    def __init__(self, record_type: str, field_name: str, constraint: str):
        super().__init__(
            constraint,
            {"record_type": record_type, "field": field_name},
        )
        self.record_type = record_type
        self.field_name = field_name


class StorageIOError(TutorAidError):
    """Raised when data cannot be written to disk."""


class ParseError(TutorAidError):
    """Raised when command text cannot be understood."""
