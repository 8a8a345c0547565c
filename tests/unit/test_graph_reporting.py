import json

import pytest

from swapcycles.core.enums import ReportFormat
from swapcycles.core.exceptions import ConfigurationError
from swapcycles.services import GraphReporter

SAMPLE_TEXT_REPORT = """Graph Structure:

Students and their Preferences:
A prefers: math
B prefers:
P prefers: science
Q prefers:
R prefers:
S prefers: history

Sections and their Students:
history: A B
math: P Q
science: R S
"""


@pytest.mark.unit
def test_text_report(sample_graph):
    reporter = GraphReporter(sample_graph.students, sample_graph.sections)
    assert reporter.generate_report(ReportFormat.TEXT) == SAMPLE_TEXT_REPORT


@pytest.mark.unit
def test_json_report(sample_graph):
    reporter = GraphReporter(sample_graph.students, sample_graph.sections)
    data = json.loads(reporter.generate_report(ReportFormat.JSON))

    assert data["students"]["A"] == ["math"]
    assert data["students"]["B"] == []
    assert data["sections"] == {
        "history": ["A", "B"],
        "math": ["P", "Q"],
        "science": ["R", "S"],
    }


@pytest.mark.unit
def test_builder_registers_students_from_preferences_only(empty_graph):
    from swapcycles.services import GraphBuilder

    GraphBuilder(empty_graph.enrollment).initialize_graph({
        "sections": {"math": ["P"]},
        "preferences": {"A": ["math"]},
    })

    assert empty_graph.students.ids() == ["A", "P"]
    assert empty_graph.finder.current_section("A") is None


@pytest.mark.unit
@pytest.mark.parametrize("graph", [
    [],
    {"sections": ["math"]},
    {"sections": {"math": "P"}},
    {"preferences": {"A": [1]}},
    {"sections": {"x": ["A"]}, "preferences": {"A": ["nowhere"]}},
])
def test_builder_rejects_malformed_graphs(empty_graph, graph):
    from swapcycles.services import GraphBuilder

    with pytest.raises(ConfigurationError):
        GraphBuilder(empty_graph.enrollment).initialize_graph(graph)


@pytest.mark.unit
def test_builder_rejects_student_in_two_sections(empty_graph):
    from swapcycles.services import GraphBuilder

    with pytest.raises(ConfigurationError):
        GraphBuilder(empty_graph.enrollment).initialize_graph({
            "sections": {"art": ["A"], "math": ["A"]},
        })
