"""
JSON persistence for the student and lesson stores.
"""

from .json_codec import (
    decode_lesson,
    decode_lessons,
    decode_student,
    decode_students,
    encode_lesson,
    encode_lessons,
    encode_student,
    encode_students,
)
from .storage_manager import StorageManager

__all__ = [
    "decode_lesson",
    "decode_lessons",
    "decode_student",
    "decode_students",
    "encode_lesson",
    "encode_lessons",
    "encode_student",
    "encode_students",
    "StorageManager",
]
