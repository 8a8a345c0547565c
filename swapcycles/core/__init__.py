"""
Core module containing the fundamental object model and base classes.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Student",
    "Section",

    # Interfaces
    "Reportable",
    "Repository",

    # Enums
    "ReportFormat",
    "LockType",
    "EnrollmentStatus",

    # Exceptions
    "SwapCycleException",
    "ValidationError",
    "ResourceNotFoundError",
    "DuplicateEntityError",
    "ConcurrencyError",
    "ConfigurationError",
]
