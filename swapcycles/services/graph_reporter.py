"""
Read-only reporting over the swap graph.
"""

import json
from typing import Any, Dict, Optional

from ..core.enums import ReportFormat
from ..core.interfaces import Reportable
from ..core.exceptions import ValidationError
from ..persistence.registries import StudentRegistry, SectionRegistry


class GraphReporter(Reportable):
    """Dumps students with their preferences and sections with their members."""

    def __init__(self, students: StudentRegistry, sections: SectionRegistry):
        self._students = students
        self._sections = sections

    def snapshot(self) -> Dict[str, Any]:
        return {
            'students': {student.id: student.preferences for student in self._students.find_all()},
            'sections': {section.id: sorted(section.students) for section in self._sections.find_all()},
        }

    def generate_report(self, format: ReportFormat = ReportFormat.TEXT,
                        scope: Optional[Dict[str, Any]] = None) -> str:
        """Generate a report in the specified format.

        ``scope`` is accepted for interface compatibility and ignored; the
        report always covers the whole graph.
        """
        data = self.snapshot()

        if format == ReportFormat.JSON:
            return json.dumps(data, indent=2)
        if format != ReportFormat.TEXT:
            raise ValidationError(f"Unsupported report format: {format}")

        lines = ["Graph Structure:", "", "Students and their Preferences:"]
        for name, preferences in data['students'].items():
            lines.append(f"{name} prefers: {' '.join(preferences)}".rstrip())

        lines.extend(["", "Sections and their Students:"])
        for name, members in data['sections'].items():
            lines.append(f"{name}: {' '.join(members)}".rstrip())

        return "\n".join(lines) + "\n"
