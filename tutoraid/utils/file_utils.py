"""
File operation utilities.

This module provides utilities for saving and loading data files
in various formats (JSON, CSV). Writes are all-or-nothing: data goes
to a temporary file beside the target and is moved into place only
once fully written, so a failed save leaves the previous file intact.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TextIO, Union

import pandas as pd

from ..exceptions import DataConversionError, StorageIOError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _write_atomically(filepath: Path, write: Callable[[TextIO], None]) -> None:
    """
    Write a text file through a temporary sibling and ``os.replace``.

    Args:
        filepath: Destination path (parent directories are created)
        write: Callback that writes the content to an open text handle

    Raises:
        StorageIOError: If any step fails; the temporary file is removed
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{filepath.name}.", suffix=".tmp", dir=filepath.parent
        )
    except OSError as e:
        logger.error(f"Failed to prepare {filepath} for writing: {e}", exc_info=True)
        raise StorageIOError(f"Could not save data to {filepath}: {e}") from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            write(handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, filepath)
    except (OSError, TypeError, ValueError) as e:
        tmp_path.unlink(missing_ok=True)
        logger.error(f"Failed to write {filepath}: {e}", exc_info=True)
        raise StorageIOError(f"Could not save data to {filepath}: {e}") from e


def save_json(data: Any, filepath: PathLike) -> None:
    """
    Save data to JSON file.

    Args:
        data: JSON-serializable data to save
        filepath: Path to save the JSON file

    Raises:
        StorageIOError: If the file cannot be written

    Examples:
        >>> save_json({"students": []}, Path("data/students.json"))
    """
    filepath = Path(filepath)

    def write(handle: TextIO) -> None:
        json.dump(data, handle, ensure_ascii=False, indent=2)
        handle.write("\n")

    _write_atomically(filepath, write)
    logger.debug(f"Saved JSON file: {filepath}")


def load_json(filepath: PathLike) -> Optional[Any]:
    """
    Load data from JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Loaded data, or None if the file does not exist

    Raises:
        DataConversionError: If the file cannot be read or is not valid JSON

    Examples:
        >>> data = load_json(Path("data/students.json"))
        >>> if data is not None:
        ...     print(len(data["students"]))
    """
    filepath = Path(filepath)
    if not filepath.exists():
        logger.info(f"JSON file not found: {filepath}")
        return None

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataConversionError(f"Invalid JSON in file {filepath}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DataConversionError(f"Could not read {filepath}: {e}") from e

    logger.debug(f"Loaded JSON file: {filepath}")
    return data


def save_csv(df: pd.DataFrame, filepath: PathLike) -> None:
    """
    Save DataFrame to CSV file.

    Args:
        df: Pandas DataFrame to save
        filepath: Path to save the CSV file

    Raises:
        StorageIOError: If the file cannot be written

    Examples:
        >>> df = pd.DataFrame({"Name": ["Amy Tan"], "Payment": ["Paid"]})
        >>> save_csv(df, Path("output/roster.csv"))
    """
    filepath = Path(filepath)
    _write_atomically(filepath, lambda handle: df.to_csv(handle, index=False))
    logger.debug(f"Saved CSV file: {filepath}")
