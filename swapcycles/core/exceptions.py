"""
Custom exceptions for the SwapCycles platform.
"""

from typing import Optional, Any, Dict


class SwapCycleException(Exception):
    """Base exception for all SwapCycles-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(SwapCycleException):
    """Raised when data validation fails."""
    pass


class ResourceNotFoundError(SwapCycleException):
    """Raised when a requested student or section is not found."""
    pass


class DuplicateEntityError(SwapCycleException):
    """Raised when attempting to create a duplicate entity."""
    pass


class ConcurrencyError(SwapCycleException):
    """Raised when concurrency control fails."""
    pass


class ConfigurationError(SwapCycleException):
    """Raised when configuration is invalid."""
    pass
