"""
Populates the registries from a graph description.

A graph description is a plain dict::

    {
        "sections": {"history": ["A", "B"], ...},
        "preferences": {"A": ["math"], ...},
    }

Every student named in either mapping is registered.
"""

from typing import Any, Dict, List, Optional

from ..core.exceptions import ConfigurationError
from .enrollment_service import EnrollmentService

SAMPLE_GRAPH: Dict[str, Any] = {
    "sections": {
        "history": ["A", "B"],
        "math": ["P", "Q"],
        "science": ["R", "S"],
    },
    "preferences": {
        "A": ["math"],
        "P": ["science"],
        "S": ["history"],
    },
}

SAMPLE_STUDENTS = ["A", "B", "P", "Q", "R", "S"]


class GraphBuilder:
    """Builds a swap graph through the enrollment service."""

    def __init__(self, enrollment_service: EnrollmentService):
        self._enrollment_service = enrollment_service

    def initialize_graph(self, graph: Optional[Dict[str, Any]] = None) -> None:
        """Create sections, students, enrollments and preferences."""
        sections, preferences = self._validate(SAMPLE_GRAPH if graph is None else graph)

        for section_id in sections:
            self._enrollment_service.create_section(section_id)

        for student_id in self._student_ids(sections, preferences):
            self._enrollment_service.register_student(student_id)

        for section_id, members in sections.items():
            for student_id in members:
                result = self._enrollment_service.enroll_student(student_id, section_id)
                if not result.success:
                    raise ConfigurationError(result.message, error_code="invalid_graph")

        for student_id, preferred in preferences.items():
            for section_id in preferred:
                self._enrollment_service.add_preference(student_id, section_id)

    @staticmethod
    def _student_ids(sections: Dict[str, List[str]], preferences: Dict[str, List[str]]) -> List[str]:
        seen: Dict[str, None] = {}
        for members in sections.values():
            for student_id in members:
                seen.setdefault(student_id)
        for student_id in preferences:
            seen.setdefault(student_id)
        return list(seen)

    @staticmethod
    def _validate(graph: Any):
        if not isinstance(graph, dict):
            raise ConfigurationError("Graph description must be a mapping", error_code="invalid_graph")

        sections = graph.get("sections", {})
        preferences = graph.get("preferences", {})

        for label, mapping in (("sections", sections), ("preferences", preferences)):
            if not isinstance(mapping, dict):
                raise ConfigurationError(f"'{label}' must be a mapping", error_code="invalid_graph")
            for key, values in mapping.items():
                if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                    raise ConfigurationError(
                        f"'{label}.{key}' must be a list of strings",
                        error_code="invalid_graph"
                    )

        for student_id, preferred in preferences.items():
            for section_id in preferred:
                if section_id not in sections:
                    raise ConfigurationError(
                        f"Student {student_id} prefers unknown section {section_id}",
                        error_code="invalid_graph"
                    )

        return sections, preferences
