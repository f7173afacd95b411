"""
Validation framework for persisted records.

This module provides:
- ValidationResult, which collects problems per record field
- Abstract Validator interface with reusable field checks
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type


@dataclass
class ValidationResult:
    """
    Problems found while validating one record.

    Attributes:
        errors: Every error message, in the order found
        warnings: Non-fatal problems such as duplicate names
        missing_fields: Required fields that were absent, in check order
        field_errors: Field name -> first error message for that field

    Examples:
        >>> result = ValidationResult()
        >>> _ = result.add_error("Bad price", "price").add_error("Bad timing", "timing")
        >>> result.first_error()
        ('price', 'Bad price')
    """

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    missing_fields: List[str] = field(default_factory=list)
    field_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """Warnings do not make a record invalid."""
        return not self.errors

    def add_error(self, message: str, field_name: Optional[str] = None) -> 'ValidationResult':
        self.errors.append(message)
        if field_name is not None:
            self.field_errors.setdefault(field_name, message)
        return self

    def add_missing(self, field_name: str) -> 'ValidationResult':
        self.missing_fields.append(field_name)
        return self.add_error(f"Missing required field: {field_name}", field_name)

    def add_warning(self, message: str) -> 'ValidationResult':
        self.warnings.append(message)
        return self

    def first_error(self) -> Optional[Tuple[str, str]]:
        """
        Get the error to report for the record.

        Returns:
            (field name, message) of the first field-specific error, or
            ("record", message) when only record-level errors exist;
            None if the record is valid
        """
        if self.field_errors:
            return next(iter(self.field_errors.items()))
        if self.errors:
            return "record", self.errors[0]
        return None


class Validator(ABC):
    """
    Abstract base class for record validators.

    Subclasses implement ``validate`` for one record type; the helper
    methods check single fields against the value types in
    ``tutoraid.models.fields`` and return an error message or None.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate a record.

        Args:
            data: Decoded JSON record

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Find required fields that are absent or null.

        Args:
            data: Dictionary to check
            required_fields: List of required field names

        Returns:
            Names of the missing fields
        """
        return [
            name for name in required_fields
            if name not in data or data[name] is None
        ]

    def validate_value(self, value: Any, value_type: Type) -> Optional[str]:
        """
        Validate a value against a value type's format rule.

        Args:
            value: Raw value from the record
            value_type: Class from ``tutoraid.models.fields``

        Returns:
            The type's constraint message if invalid, None if valid
        """
        if not value_type.is_valid(value):
            return value_type.MESSAGE_CONSTRAINTS
        return None

    def validate_optional_value(self, value: Any, value_type: Type) -> Optional[str]:
        """Like ``validate_value`` but accepts an empty string as unset."""
        if value == "":
            return None
        return self.validate_value(value, value_type)

    def validate_value_list(
        self,
        values: Any,
        value_type: Type,
        field_name: str
    ) -> Optional[str]:
        """
        Validate a list whose items must each satisfy a value type.

        Returns:
            Error message for the first bad item, None if all are valid
        """
        if not isinstance(values, list):
            return f"{field_name} must be a list, got {type(values).__name__}"

        for item in values:
            if not value_type.is_valid(item):
                return value_type.MESSAGE_CONSTRAINTS
        return None

    def find_duplicates(self, values: List[Any]) -> List[Any]:
        """Return values that appear more than once, in first-seen order."""
        seen = set()
        duplicates = []
        for value in values:
            if value in seen and value not in duplicates:
                duplicates.append(value)
            seen.add(value)
        return duplicates
