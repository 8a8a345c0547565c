"""
Core entities for the SwapCycles platform.
"""

from abc import ABC
from typing import Any, Dict, List, Set

from .exceptions import ValidationError


class AbstractEntity(ABC):
    """Base abstract entity with identity and versioning."""

    def __init__(self, entity_id: str):
        if not isinstance(entity_id, str) or not entity_id.strip():
            raise ValidationError(
                f"{self.__class__.__name__} id must be a non-empty string",
                error_code="invalid_id",
            )
        self._id = entity_id
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a mutation of the entity."""
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id}, version={self._version})"


class Student(AbstractEntity):
    """Student holding an ordered list of preferred section ids."""

    def __init__(self, name: str):
        super().__init__(name)
        self._preferences: List[str] = []

    @property
    def preferences(self) -> List[str]:
        return self._preferences.copy()

    def add_preference(self, section_name: str) -> None:
        """Append a section to the end of the preference list."""
        if not isinstance(section_name, str) or not section_name.strip():
            raise ValidationError("Preferred section must be a non-empty string")
        self._preferences.append(section_name)
        self.touch()

    def prefers(self, section_name) -> bool:
        """Check membership only; rank is not considered."""
        return section_name in self._preferences

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._id,
            'preferences': list(self._preferences),
        })
        return base_dict


class Section(AbstractEntity):
    """Section with an unordered set of enrolled student ids."""

    def __init__(self, name: str):
        super().__init__(name)
        self._students: Set[str] = set()

    @property
    def students(self) -> Set[str]:
        return self._students.copy()

    @property
    def enrolled_count(self) -> int:
        return len(self._students)

    def add_student(self, student_name: str) -> None:
        """Add a student to the section. Adding twice is a no-op."""
        if student_name in self._students:
            return
        self._students.add(student_name)
        self.touch()

    def has_student(self, student_name: str) -> bool:
        return student_name in self._students

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._id,
            'students': sorted(self._students),
        })
        return base_dict
