"""
Enumerations and constants for the SwapCycles platform.
"""

from enum import Enum


class ReportFormat(Enum):
    """Supported report formats."""
    TEXT = "text"
    JSON = "json"


class LockType(Enum):
    """Types of locks available."""
    READ = "read"
    WRITE = "write"


class EnrollmentStatus(Enum):
    """Outcome of an enrollment request."""
    CONFIRMED = "confirmed"
    ALREADY_ENROLLED = "already_enrolled"
    REJECTED = "rejected"
