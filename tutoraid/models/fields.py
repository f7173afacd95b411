"""
Validated value types for student and lesson fields.

Each type wraps a single string (or bool) and checks it against a
format rule on construction, so an invalid instance can never exist.
The raw rule is also available through ``is_valid`` for callers that
need to check text before building the value.

Examples:
    >>> Price("1234.50").display
    '$1,234.5'
    >>> Capacity("10").limit
    10
    >>> StudentName.is_valid(" Amy")
    False
"""

import re
from dataclasses import dataclass
from typing import Any, ClassVar

from ..exceptions import ValidationError


@dataclass(frozen=True)
class _PatternValue:
    """Base for string values validated by a full-match regular expression."""

    MESSAGE_CONSTRAINTS: ClassVar[str] = ""
    VALIDATION_REGEX: ClassVar[str] = ""

    value: str

    def __post_init__(self):
        if not self.is_valid(self.value):
            raise ValidationError(self.MESSAGE_CONSTRAINTS, {"value": self.value})

    @classmethod
    def is_valid(cls, text: Any) -> bool:
        """Check whether text satisfies this type's format rule."""
        if not isinstance(text, str):
            return False
        return re.fullmatch(cls.VALIDATION_REGEX, text) is not None

    def __str__(self) -> str:
        return self.value


class StudentName(_PatternValue):
    """Full name of a student; the student's identity."""

    MESSAGE_CONSTRAINTS = (
        "Names should only contain alphanumeric characters and spaces, "
        "and it should not be blank"
    )
    # First character must not be a space, otherwise " " would be valid
    VALIDATION_REGEX = r"[A-Za-z0-9][A-Za-z0-9 ]*"


class ParentName(StudentName):
    """Full name of a student's parent."""


class LessonName(_PatternValue):
    """Name of a lesson; the lesson's identity."""

    MESSAGE_CONSTRAINTS = (
        "Lesson names should only contain alphanumeric characters and spaces, "
        "and it should not be blank"
    )
    VALIDATION_REGEX = r"[A-Za-z0-9][A-Za-z0-9 ]*"


class Phone(_PatternValue):
    """Phone number of a student or parent."""

    MESSAGE_CONSTRAINTS = (
        "Phone numbers should only contain numbers, and it should be at least 3 digits long"
    )
    VALIDATION_REGEX = r"[0-9]{3,}"


class Progress(_PatternValue):
    """One progress note recorded for a student."""

    MESSAGE_CONSTRAINTS = (
        "Progress should only contain alphanumeric characters and spaces, "
        "and it should not be blank"
    )
    VALIDATION_REGEX = r"[A-Za-z0-9][A-Za-z0-9 ]*"

    @property
    def is_empty(self) -> bool:
        """True for the placeholder shown when nothing has been recorded."""
        return self == EMPTY_PROGRESS


EMPTY_PROGRESS_DESCRIPTION = "No Progress"
EMPTY_PROGRESS = Progress(EMPTY_PROGRESS_DESCRIPTION)


class Price(_PatternValue):
    """
    Price of a lesson, kept as its canonical decimal string.

    The string is never converted to a float; ``display`` derives the
    formatted amount from the digits directly.
    """

    MESSAGE_CONSTRAINTS = (
        "Price should be at least one digit long. "
        "It may contain dollars only or both dollars and cents."
    )
    VALIDATION_REGEX = r"[0-9]+(\.[0-9]{2})?"

    @property
    def display(self) -> str:
        return format_price(self.value)


class Capacity(_PatternValue):
    """Maximum number of students a lesson can take."""

    MESSAGE_CONSTRAINTS = "Capacity should be a non-negative integer."
    VALIDATION_REGEX = r"[0-9]+"

    @property
    def limit(self) -> int:
        return int(self.value)


class Timing(_PatternValue):
    """Free-text schedule of a lesson, e.g. ``Mon 1000-1200``."""

    MESSAGE_CONSTRAINTS = "Timing can take any values, and it should not be blank"
    VALIDATION_REGEX = r"[^\s].*"


@dataclass(frozen=True)
class PaymentStatus:
    """Whether a student has paid for the current period."""

    has_paid: bool

    def __post_init__(self):
        if not isinstance(self.has_paid, bool):
            raise ValidationError(
                "Payment status should be either paid or not paid",
                {"value": self.has_paid},
            )

    def __str__(self) -> str:
        return "Paid" if self.has_paid else "Not Paid"


PAID = PaymentStatus(True)
UNPAID = PaymentStatus(False)


def format_price(price: str) -> str:
    """
    Format a canonical price string for display.

    Groups the dollars by thousands and drops trailing zero cents.

    Args:
        price: Price string matching ``Price.VALIDATION_REGEX``

    Returns:
        Display string with a ``$`` prefix

    Examples:
        >>> format_price("80.00")
        '$80'
        >>> format_price("1234567.89")
        '$1,234,567.89'
    """
    dollars, _, cents = price.partition(".")
    cents = cents.rstrip("0")
    grouped = f"{int(dollars):,}"
    return f"${grouped}.{cents}" if cents else f"${grouped}"
