import pytest
from typing import Any, Dict, Generator

from fastapi.testclient import TestClient

from swapcycles.main import SwapCyclePlatform
from swapcycles.persistence import StudentRegistry, SectionRegistry
from swapcycles.services import (
    ConcurrencyManager, CycleFinder, EnrollmentService, GraphBuilder, SAMPLE_GRAPH
)


MUTUAL_PAIR_GRAPH: Dict[str, Any] = {
    "sections": dict(SAMPLE_GRAPH["sections"]),
    "preferences": {
        "A": ["math"],
        "B": ["math"],
        "P": ["science", "history"],
        "S": ["history"],
    },
}

# Every pair of A, P, S wants to swap with each other
TRIANGLE_GRAPH: Dict[str, Any] = {
    "sections": {"s1": ["A"], "s2": ["P"], "s3": ["S"]},
    "preferences": {
        "A": ["s2", "s3"],
        "P": ["s1", "s3"],
        "S": ["s1", "s2"],
    },
}


class Graph:
    """Registries plus the services operating on them."""

    def __init__(self, graph: Dict[str, Any] = None):
        self.concurrency_manager = ConcurrencyManager()
        self.students = StudentRegistry()
        self.sections = SectionRegistry()
        self.enrollment = EnrollmentService(self.students, self.sections, self.concurrency_manager)
        self.finder = CycleFinder(self.students, self.sections, self.concurrency_manager)
        GraphBuilder(self.enrollment).initialize_graph(graph)


@pytest.fixture
def sample_graph() -> Graph:
    return Graph()


@pytest.fixture
def mutual_pair_graph() -> Graph:
    return Graph(MUTUAL_PAIR_GRAPH)


@pytest.fixture
def triangle_graph() -> Graph:
    return Graph(TRIANGLE_GRAPH)


@pytest.fixture
def empty_graph() -> Graph:
    return Graph({})


@pytest.fixture
def platform() -> SwapCyclePlatform:
    platform = SwapCyclePlatform()
    platform.initialize_graph()
    return platform


@pytest.fixture
def client(platform: SwapCyclePlatform) -> Generator:
    with TestClient(platform.rest_api.app) as c:
        yield c
