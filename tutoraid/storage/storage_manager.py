"""
File-backed storage for the student and lesson stores.

Reads both JSON files at startup, falling back to an empty store for
any file that cannot be decoded, then reconciles enrollments across
the two. Saves write each store atomically.
"""

import logging
from pathlib import Path
from typing import Callable, List, Union

import pandas as pd

from ..exceptions import DataConversionError
from ..models.lesson import Lesson
from ..models.student import Student
from ..store.model_manager import ModelManager
from ..utils.file_utils import load_json, save_csv, save_json
from .json_codec import decode_lessons, decode_students, encode_lessons, encode_students


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

ROSTER_COLUMNS = [
    "Name", "Phone", "Parent", "Parent Phone", "Progress", "Payment", "Lessons",
]


class StorageManager:
    """
    Reads and writes TutorAid data files.

    Args:
        student_file: JSON file for the student store
        lesson_file: JSON file for the lesson store

    Examples:
        >>> storage = StorageManager(Path("data/students.json"), Path("data/lessons.json"))
        >>> model = storage.load_model()
        >>> model.add_student(amy)
        >>> storage.save(model)
    """

    def __init__(self, student_file: PathLike, lesson_file: PathLike):
        self._student_file = Path(student_file)
        self._lesson_file = Path(lesson_file)

    @property
    def student_file(self) -> Path:
        return self._student_file

    @property
    def lesson_file(self) -> Path:
        return self._lesson_file

    def read_students(self) -> List[Student]:
        """
        Read the student file.

        Returns:
            Decoded students, or an empty list if the file does not exist

        Raises:
            DataConversionError: If the file is unreadable or invalid
        """
        data = load_json(self._student_file)
        if data is None:
            return []
        return decode_students(data)

    def read_lessons(self) -> List[Lesson]:
        """
        Read the lesson file.

        Raises:
            DataConversionError: If the file is unreadable or invalid
        """
        data = load_json(self._lesson_file)
        if data is None:
            return []
        return decode_lessons(data)

    def load_model(self) -> ModelManager:
        """
        Build a ModelManager from both files.

        A file that fails to decode is logged and replaced by an empty
        store; enrollments are then reconciled across both stores.
        """
        students = self._read_or_empty(self.read_students, self._student_file, "student")
        lessons = self._read_or_empty(self.read_lessons, self._lesson_file, "lesson")

        model = ModelManager()
        repairs = model.reset_data(students, lessons)
        logger.info(
            f"Loaded {len(model.students())} students and {len(model.lessons())} lessons"
            + (f" ({len(repairs)} enrollment references repaired)" if repairs else "")
        )
        return model

    def _read_or_empty(self, read: Callable[[], list], path: Path, label: str) -> list:
        try:
            return read()
        except DataConversionError as e:
            logger.warning(
                f"Data file {path} is not in the correct format; "
                f"starting with an empty {label} list: {e.message}"
            )
            return []

    def save_students(self, model: ModelManager) -> None:
        """
        Write the student store.

        Raises:
            StorageIOError: If the file cannot be written
        """
        lesson_order = [lesson.key for lesson in model.lessons()]
        save_json(encode_students(model.students(), lesson_order), self._student_file)

    def save_lessons(self, model: ModelManager) -> None:
        """
        Write the lesson store.

        Raises:
            StorageIOError: If the file cannot be written
        """
        student_order = [student.key for student in model.students()]
        save_json(encode_lessons(model.lessons(), student_order), self._lesson_file)

    def save(self, model: ModelManager) -> None:
        """Write both stores."""
        self.save_students(model)
        self.save_lessons(model)
        logger.info(f"Saved data to {self._student_file} and {self._lesson_file}")

    def export_roster(self, model: ModelManager, filepath: PathLike) -> int:
        """
        Export every student as one CSV row.

        Args:
            model: Model to export
            filepath: Destination CSV file

        Returns:
            Number of rows written

        Raises:
            StorageIOError: If the file cannot be written
        """
        rows = [
            {
                "Name": student.name.value,
                "Phone": student.phone.value,
                "Parent": student.parent_name.value,
                "Parent Phone": student.parent_phone.value,
                "Progress": student.current_progress.value,
                "Payment": str(student.payment_status),
                "Lessons": "; ".join(lesson.key for lesson in model.lessons_of(student)),
            }
            for student in model.students()
        ]
        save_csv(pd.DataFrame(rows, columns=ROSTER_COLUMNS), filepath)
        logger.info(f"Exported {len(rows)} students to {filepath}")
        return len(rows)
