"""
User preferences dataclass.

Holds display geometry and the data file locations chosen by the
user. Preferences are stored as JSON; unreadable or invalid data falls
back to defaults so a corrupt file never stops TutorAid from starting.
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from ..exceptions import DataConversionError
from .file_utils import load_json, save_json


logger = logging.getLogger(__name__)


@dataclass
class UserPreferences:
    """
    Preferences for display and data locations.

    Attributes:
        window_width: Display width in pixels
        window_height: Display height in pixels
        window_x: Display x position, or None to let the UI decide
        window_y: Display y position, or None to let the UI decide
        student_file: Override for the student data file
        lesson_file: Override for the lesson data file

    Examples:
        >>> prefs = UserPreferences(window_width=1024, window_height=768)
        >>> prefs.to_dict()["window_width"]
        1024
    """

    window_width: int = 1200
    window_height: int = 800
    window_x: Optional[int] = None
    window_y: Optional[int] = None
    student_file: Optional[str] = None
    lesson_file: Optional[str] = None

    def __post_init__(self):
        """Validate preferences after initialization."""
        for name in ("window_width", "window_height"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got: {value!r}")

        for name in ("window_x", "window_y"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise ValueError(f"{name} must be an integer, got: {value!r}")

        for name in ("student_file", "lesson_file"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ValueError(f"{name} must be a non-empty path, got: {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert preferences to a JSON-ready dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserPreferences":
        """
        Create preferences from a dictionary, ignoring unknown keys.

        Raises:
            ValueError: If any known value is invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Preferences must be an object, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def load_preferences(filepath: Path) -> UserPreferences:
    """
    Load preferences, falling back to defaults on any problem.

    Args:
        filepath: Preferences JSON file

    Returns:
        Stored preferences, or defaults if the file is missing or corrupt
    """
    try:
        data = load_json(filepath)
        if data is None:
            return UserPreferences()
        return UserPreferences.from_dict(data)
    except (DataConversionError, ValueError, TypeError) as e:
        logger.warning(f"Preferences in {filepath} are unusable, using defaults: {e}")
        return UserPreferences()


def save_preferences(preferences: UserPreferences, filepath: Path) -> None:
    """
    Save preferences to JSON.

    Raises:
        StorageIOError: If the file cannot be written
    """
    save_json(preferences.to_dict(), filepath)
