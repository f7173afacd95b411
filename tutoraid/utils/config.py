"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation. Values come from the environment, optionally
seeded from a ``.env`` file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables and provides
    validated access to configuration values.

    Attributes:
        data_dir: Directory holding the data files
        student_file: JSON file for the student store
        lesson_file: JSON file for the lesson store
        prefs_file: JSON file for user preferences
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Students stored in: {config.student_file}")
    """

    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        # Load .env file if it exists
        load_dotenv()

        self._data_dir = Path(os.getenv("TUTORAID_DATA_DIR", "data"))
        self._student_file = Path(
            os.getenv("TUTORAID_STUDENT_FILE", str(self._data_dir / "students.json"))
        )
        self._lesson_file = Path(
            os.getenv("TUTORAID_LESSON_FILE", str(self._data_dir / "lessons.json"))
        )
        self._prefs_file = Path(os.getenv("TUTORAID_PREFS_FILE", "preferences.json"))

        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        return self._data_dir

    @property
    def student_file(self) -> Path:
        """Get student data file path."""
        return self._student_file

    @property
    def lesson_file(self) -> Path:
        """Get lesson data file path."""
        return self._lesson_file

    @property
    def prefs_file(self) -> Path:
        """Get user preferences file path."""
        return self._prefs_file

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self._log_level

    @property
    def log_level_value(self) -> int:
        """Get logging level as a ``logging`` constant."""
        return getattr(logging, self._log_level, logging.INFO)

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path, if file logging is enabled."""
        return self._log_file

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if self._student_file == self._lesson_file:
            errors.append("TUTORAID_STUDENT_FILE and TUTORAID_LESSON_FILE must differ")

        for name, path in (
            ("TUTORAID_STUDENT_FILE", self._student_file),
            ("TUTORAID_LESSON_FILE", self._lesson_file),
            ("TUTORAID_PREFS_FILE", self._prefs_file),
        ):
            if path.exists() and path.is_dir():
                errors.append(f"{name} must be a file, got directory: {path}")

        if self._log_level not in self.VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(self.VALID_LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True


# Singleton instance
config = Config()
