"""
Core interfaces and abstract base classes for the SwapCycles platform.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TypeVar, Generic

from .enums import ReportFormat


T = TypeVar('T')


class Reportable(ABC):
    """Interface for components that can generate reports."""

    @abstractmethod
    def generate_report(self, format: ReportFormat, scope: Optional[Dict[str, Any]] = None) -> str:
        """Generate a report in the specified format."""
        pass


class Repository(ABC, Generic[T]):
    """Abstract base class for entity registries."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Save an entity."""
        pass

    @abstractmethod
    def find_by_id(self, entity_id: str) -> Optional[T]:
        """Find entity by ID."""
        pass

    @abstractmethod
    def find_all(self) -> List[T]:
        """Find all entities in ascending id order."""
        pass
