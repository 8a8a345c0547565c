"""
Services module: cycle search, graph building, enrollment and concurrency.
"""

from .concurrency_manager import ConcurrencyManager, GRAPH_RESOURCE
from .cycle_finder import CycleFinder, CycleSearchResult, TraversalContext, canonical_cycle_key
from .enrollment_service import EnrollmentService, EnrollmentResult
from .graph_builder import GraphBuilder, SAMPLE_GRAPH, SAMPLE_STUDENTS
from .graph_reporter import GraphReporter

__all__ = [
    "ConcurrencyManager",
    "GRAPH_RESOURCE",
    "CycleFinder",
    "CycleSearchResult",
    "TraversalContext",
    "canonical_cycle_key",
    "EnrollmentService",
    "EnrollmentResult",
    "GraphBuilder",
    "SAMPLE_GRAPH",
    "SAMPLE_STUDENTS",
    "GraphReporter",
]
