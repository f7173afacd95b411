"""
CommandResult for reporting the outcome of a user command.

Every command returns one of these instead of raising, so the command
loop can print feedback the same way for successes and failures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import TutorAidError


class ResultStatus(Enum):
    """Status of a CommandResult."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class CommandResult:
    """
    Outcome of executing one command.

    Attributes:
        status: SUCCESS or FAILURE
        feedback: Human-readable message for the user
        error: The error that caused a failure (None on success)
        should_exit: Whether the application should stop
        show_help: Whether usage information should be displayed

    Examples:
        >>> result = CommandResult.success("New student added: Amy Tan")
        >>> result.is_success
        True

        >>> result = CommandResult.failure(DuplicateEntityError("This student already exists"))
        >>> result.feedback
        'This student already exists'
    """

    status: ResultStatus
    feedback: str
    error: Optional[TutorAidError] = None
    should_exit: bool = False
    show_help: bool = False

    @property
    def is_success(self) -> bool:
        """Check if the command succeeded."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the command failed."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(
        cls,
        feedback: str,
        should_exit: bool = False,
        show_help: bool = False
    ) -> 'CommandResult':
        """
        Create a successful result.

        Args:
            feedback: Confirmation message
            should_exit: Whether the application should stop
            show_help: Whether usage information should be displayed

        Returns:
            CommandResult with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            feedback=feedback,
            should_exit=should_exit,
            show_help=show_help
        )

    @classmethod
    def failure(cls, error: TutorAidError) -> 'CommandResult':
        """
        Create a failure result from an error.

        Args:
            error: The error that stopped the command

        Returns:
            CommandResult with FAILURE status and the error's message
        """
        return cls(
            status=ResultStatus.FAILURE,
            feedback=error.message,
            error=error
        )
