"""
Persistence module holding the in-memory registries.
"""

from .registries import BaseRegistry, StudentRegistry, SectionRegistry

__all__ = [
    "BaseRegistry",
    "StudentRegistry",
    "SectionRegistry",
]
