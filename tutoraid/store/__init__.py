"""
In-memory stores, enrollment synchronization and filtered views.

Usage:
    >>> from tutoraid.store import ModelManager
    >>> model = ModelManager()
"""

from .enrollment import EnrollmentSynchronizer
from .entity_store import EntityStore, LessonStore, StudentStore
from .filtered_view import FilteredView, show_all
from .model_manager import ModelManager

__all__ = [
    "EnrollmentSynchronizer",
    "EntityStore",
    "LessonStore",
    "StudentStore",
    "FilteredView",
    "show_all",
    "ModelManager",
]
