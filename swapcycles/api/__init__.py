"""
API module for the REST implementation.
"""

from .rest_api import SwapCycleRestAPI

__all__ = [
    "SwapCycleRestAPI",
]
