"""
Enrollment service: the only writer of the swap graph.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.entities import Student, Section
from ..core.enums import EnrollmentStatus, LockType
from ..persistence.registries import StudentRegistry, SectionRegistry
from .concurrency_manager import ConcurrencyManager, GRAPH_RESOURCE


@dataclass
class EnrollmentResult:
    """Result of an enrollment operation."""
    success: bool
    status: EnrollmentStatus
    message: str
    section_id: Optional[str] = None


class EnrollmentService:
    """Registers students and sections, enrolls students, records preferences.

    Every mutation holds the graph WRITE lock, so it fails fast with
    ConcurrencyError while a cycle count holds the READ lock.
    """

    def __init__(self, students: StudentRegistry, sections: SectionRegistry,
                 concurrency_manager: Optional[ConcurrencyManager] = None):
        self._students = students
        self._sections = sections
        self._concurrency_manager = concurrency_manager
        self._lock = threading.RLock()

    @contextmanager
    def _write(self):
        with self._lock:
            if self._concurrency_manager is None:
                yield
                return
            with self._concurrency_manager.lock(
                GRAPH_RESOURCE,
                LockType.WRITE,
                f"enrollment_service_{threading.get_ident()}"
            ):
                yield
                self._concurrency_manager.increment_version(GRAPH_RESOURCE)

    def create_section(self, section_id: str) -> Section:
        """Create and register an empty section."""
        with self._write():
            return self._sections.add(Section(section_id))

    def register_student(self, student_id: str) -> Student:
        """Create and register a student with no preferences."""
        with self._write():
            return self._students.add(Student(student_id))

    def enroll_student(self, student_id: str, section_id: str) -> EnrollmentResult:
        """Enroll a student, keeping each student in at most one section."""
        with self._write():
            self._students.get(student_id)
            section = self._sections.get(section_id)

            if section.has_student(student_id):
                return EnrollmentResult(
                    success=True,
                    status=EnrollmentStatus.ALREADY_ENROLLED,
                    message="Student already enrolled",
                    section_id=section_id
                )

            current = self._sections.find_sections_of(student_id)
            if current:
                return EnrollmentResult(
                    success=False,
                    status=EnrollmentStatus.REJECTED,
                    message=f"Student {student_id} is already enrolled in {current[0].id}",
                    section_id=current[0].id
                )

            section.add_student(student_id)
            return EnrollmentResult(
                success=True,
                status=EnrollmentStatus.CONFIRMED,
                message="Student enrolled successfully",
                section_id=section_id
            )

    def add_preference(self, student_id: str, section_id: str) -> Student:
        """Append an existing section to a student's preference list."""
        with self._write():
            student = self._students.get(student_id)
            self._sections.get(section_id)
            student.add_preference(section_id)
            return student

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            sections = self._sections.find_all()
            students = self._students.find_all()
            return {
                'total_students': len(students),
                'total_sections': len(sections),
                'total_enrollments': sum(section.enrolled_count for section in sections),
                'total_preferences': sum(len(student.preferences) for student in students),
            }
