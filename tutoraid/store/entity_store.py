"""
Stores that own the student and lesson collections.

Each store keeps its entities in insertion order, keyed by identity
(the entity's name), and guarantees that no two entities share a name.
Every operation validates before it mutates, so a failed call leaves
the store exactly as it was.
"""

import logging
from typing import Dict, Generic, Iterable, Iterator, List, Tuple, TypeVar

from ..exceptions import DuplicateEntityError, EntityNotFoundError
from ..models.lesson import Lesson
from ..models.student import Student


logger = logging.getLogger(__name__)

T = TypeVar("T", Student, Lesson)


class EntityStore(Generic[T]):
    """
    Ordered collection of uniquely named entities.

    Subclasses set ``entity_label`` for messages; entities must expose a
    ``key`` property holding their identity string.
    """

    entity_label = "entity"

    def __init__(self, entities: Iterable[T] = ()):
        self._entities: Dict[str, T] = {}
        self.reset(entities)

    def contains(self, entity: T) -> bool:
        """Identity-based existence check."""
        return entity.key in self._entities

    def __contains__(self, entity: T) -> bool:
        return self.contains(entity)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._entities.values()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntityStore):
            return NotImplemented
        return type(self) is type(other) and self.all() == other.all()

    def get(self, key: str) -> T:
        """
        Look up an entity by name.

        Raises:
            EntityNotFoundError: If no entity has this name
        """
        entity = self._entities.get(key)
        if entity is None:
            raise EntityNotFoundError(self._not_found_message(key))
        return entity

    def add(self, entity: T) -> None:
        """
        Append an entity.

        Raises:
            DuplicateEntityError: If an entity with the same name exists
        """
        if entity.key in self._entities:
            raise DuplicateEntityError(
                f"This {self.entity_label} already exists in TutorAid: {entity.key}"
            )
        self._entities[entity.key] = entity
        logger.debug(f"Added {self.entity_label}: {entity.key}")

    def remove(self, entity: T) -> T:
        """
        Remove the entity with the same identity and return the stored value.

        Raises:
            EntityNotFoundError: If no entity has this name
        """
        removed = self.get(entity.key)
        del self._entities[entity.key]
        logger.debug(f"Removed {self.entity_label}: {entity.key}")
        return removed

    def replace(self, target: T, replacement: T) -> None:
        """
        Swap ``target`` for ``replacement`` in the same position.

        Raises:
            EntityNotFoundError: If ``target`` is not in the store
            DuplicateEntityError: If ``replacement`` is named like another entity
        """
        self.get(target.key)
        if replacement.key != target.key and replacement.key in self._entities:
            raise DuplicateEntityError(
                f"This {self.entity_label} already exists in TutorAid: {replacement.key}"
            )
        self._entities = {
            (replacement.key if key == target.key else key):
                (replacement if key == target.key else entity)
            for key, entity in self._entities.items()
        }
        logger.debug(f"Replaced {self.entity_label}: {target.key} -> {replacement.key}")

    def reset(self, entities: Iterable[T]) -> None:
        """
        Replace the whole collection.

        Raises:
            DuplicateEntityError: If two of the given entities share a name
        """
        fresh: Dict[str, T] = {}
        for entity in entities:
            if entity.key in fresh:
                raise DuplicateEntityError(
                    f"Duplicate {self.entity_label} name: {entity.key}"
                )
            fresh[entity.key] = entity
        self._entities = fresh

    def all(self) -> Tuple[T, ...]:
        """Return every entity in insertion order."""
        return tuple(self._entities.values())

    def names(self) -> List[str]:
        return list(self._entities)

    def _not_found_message(self, key: str) -> str:
        return f"The {self.entity_label} could not be found: {key}"


class StudentStore(EntityStore[Student]):
    """Owns every Student, keyed by full name."""

    entity_label = "student"


class LessonStore(EntityStore[Lesson]):
    """Owns every Lesson, keyed by lesson name."""

    entity_label = "lesson"
