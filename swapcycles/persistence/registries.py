"""
In-memory registries holding the students and sections of a swap graph.
"""

import threading
from typing import Dict, Iterator, List, Optional, TypeVar, Generic

from ..core.entities import AbstractEntity, Student, Section
from ..core.interfaces import Repository
from ..core.exceptions import DuplicateEntityError, ResourceNotFoundError

T = TypeVar('T', bound=AbstractEntity)


class BaseRegistry(Repository[T], Generic[T]):
    """Base registry implementation with common functionality.

    Iteration is always in ascending id order so that every consumer,
    the cycle search included, sees a reproducible ordering.
    """

    def __init__(self, entity_type: str):
        self._entity_type = entity_type
        self._entities: Dict[str, T] = {}
        self._lock = threading.RLock()

    def add(self, entity: T) -> T:
        """Register a new entity, rejecting duplicate ids."""
        with self._lock:
            if entity.id in self._entities:
                raise DuplicateEntityError(
                    f"{self._entity_type.capitalize()} {entity.id} already exists",
                    error_code=f"duplicate_{self._entity_type}",
                    details={'id': entity.id},
                )
            self._entities[entity.id] = entity
            return entity

    def save(self, entity: T) -> T:
        """Insert or replace an entity."""
        with self._lock:
            self._entities[entity.id] = entity
            return entity

    def find_by_id(self, entity_id: str) -> Optional[T]:
        """Find entity by ID."""
        with self._lock:
            return self._entities.get(entity_id)

    def get(self, entity_id: str) -> T:
        """Find entity by ID or raise ResourceNotFoundError."""
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise ResourceNotFoundError(
                f"{self._entity_type.capitalize()} {entity_id} not found",
                error_code=f"{self._entity_type}_not_found",
                details={'id': entity_id},
            )
        return entity

    def find_all(self) -> List[T]:
        """Find all entities in ascending id order."""
        with self._lock:
            return [self._entities[entity_id] for entity_id in sorted(self._entities)]

    def ids(self) -> List[str]:
        """Get all entity ids in ascending order."""
        with self._lock:
            return sorted(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(self.find_all())


class StudentRegistry(BaseRegistry[Student]):
    """Registry for students."""

    def __init__(self):
        super().__init__("student")


class SectionRegistry(BaseRegistry[Section]):
    """Registry for sections."""

    def __init__(self):
        super().__init__("section")

    def find_sections_of(self, student_name: str) -> List[Section]:
        """Find every section listing the student, in ascending id order."""
        return [section for section in self.find_all() if section.has_student(student_name)]
