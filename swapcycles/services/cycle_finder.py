"""
Swap-cycle enumeration over the student/section preference graph.

Two students form a mutual-desire pair when each prefers the section the
other currently holds. A swap cycle is a path of such pairs that leaves a
start student and returns to it. Cycles are deduplicated by their sorted
member set, so traversals visiting the same students in a different order
count once.
"""

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from ..core.enums import LockType
from ..persistence.registries import StudentRegistry, SectionRegistry
from .concurrency_manager import ConcurrencyManager, GRAPH_RESOURCE

DEFAULT_KEY_DELIMITER = ","


def canonical_cycle_key(path: List[str], delimiter: str = DEFAULT_KEY_DELIMITER) -> str:
    """Build the dedup key for a closed path: its distinct members, sorted.

    Ids are joined as-is, so ids containing the delimiter can collide:
    {"A,B", "C"} and {"A", "B,C"} both give "A,B,C" with the default ",".
    Choose a delimiter that never occurs in student ids.
    """
    return delimiter.join(sorted(set(path)))


@dataclass
class TraversalContext:
    """Working state of one cycle search, created fresh per start student.

    ``candidates``, ``assignments`` and ``preferences`` are a snapshot of the
    registries taken when the search starts.
    """
    start_id: str
    candidates: List[str] = field(default_factory=list)
    assignments: Dict[str, str] = field(default_factory=dict)
    preferences: Dict[str, Set[str]] = field(default_factory=dict)
    on_path: Set[str] = field(default_factory=set)
    path: List[str] = field(default_factory=list)
    cycle_keys: Set[str] = field(default_factory=set)


@dataclass
class CycleSearchResult:
    """Outcome of a cycle search for one start student."""
    student_id: str
    found: bool
    cycle_keys: List[str] = field(default_factory=list)
    message: str = ""

    @property
    def count(self) -> int:
        return len(self.cycle_keys)


class CycleFinder:
    """Finds the unique swap cycles passing through a student."""

    def __init__(self, students: StudentRegistry, sections: SectionRegistry,
                 concurrency_manager: Optional[ConcurrencyManager] = None,
                 key_delimiter: str = DEFAULT_KEY_DELIMITER):
        self._students = students
        self._sections = sections
        self._concurrency_manager = concurrency_manager
        self._key_delimiter = key_delimiter

    def current_section(self, student_id: str) -> Optional[str]:
        """Get the section a student is currently in.

        Sections are scanned in ascending id order and the first match wins,
        so a student wrongly listed in several sections resolves to the
        lowest section id. Returns None when the student is in no section.
        """
        for section in self._sections.find_all():
            if section.has_student(student_id):
                return section.id
        return None

    def wants_swap(self, student_x: str, student_y: str) -> bool:
        """Check whether each student prefers the other's current section."""
        x = self._students.find_by_id(student_x)
        y = self._students.find_by_id(student_y)
        if x is None or y is None:
            return False

        x_section = self.current_section(student_x)
        y_section = self.current_section(student_y)
        if x_section is None or y_section is None:
            return False

        return x.prefers(y_section) and y.prefers(x_section)

    def create_context(self, start_id: str) -> TraversalContext:
        """Snapshot the registries into a fresh traversal context."""
        assignments: Dict[str, str] = {}
        for section in self._sections.find_all():
            for student_id in section.students:
                assignments.setdefault(student_id, section.id)

        students = self._students.find_all()
        return TraversalContext(
            start_id=start_id,
            candidates=[student.id for student in students],
            assignments=assignments,
            preferences={student.id: set(student.preferences) for student in students},
        )

    def find_cycles(self, student_id: str) -> CycleSearchResult:
        """Enumerate the unique cycles that start and end at a student.

        With a concurrency manager the search waits for any enrollment
        change in progress to finish instead of failing.
        """
        if self._concurrency_manager is None:
            return self._find_cycles(student_id)

        with self._concurrency_manager.lock(
            GRAPH_RESOURCE,
            LockType.READ,
            f"cycle_finder_{threading.get_ident()}",
            blocking=True
        ):
            return self._find_cycles(student_id)

    def count_unique_cycles(self, student_id: str) -> int:
        """Count the unique cycles through a student.

        An unknown student is reported on stdout and counts as zero.
        """
        result = self.find_cycles(student_id)
        if not result.found:
            print(result.message)
        return result.count

    def _find_cycles(self, student_id: str) -> CycleSearchResult:
        if student_id not in self._students:
            return CycleSearchResult(
                student_id=student_id,
                found=False,
                message=f"Student {student_id} not found."
            )

        context = self.create_context(student_id)
        self._search(context, student_id)

        return CycleSearchResult(
            student_id=student_id,
            found=True,
            cycle_keys=sorted(context.cycle_keys)
        )

    @staticmethod
    def _mutual(context: TraversalContext, x: str, y: str) -> bool:
        x_section = context.assignments.get(x)
        y_section = context.assignments.get(y)
        if x_section is None or y_section is None:
            return False
        return (y_section in context.preferences.get(x, ())
                and x_section in context.preferences.get(y, ()))

    def _search(self, context: TraversalContext, current: str) -> None:
        # Explicit stack of (student, remaining candidates), so path length
        # is not limited by the interpreter's recursion limit.
        context.on_path.add(current)
        context.path.append(current)
        stack = [(current, iter(context.candidates))]

        while stack:
            node, candidates = stack[-1]
            for candidate in candidates:
                if candidate == node:
                    continue
                # The start student stays reachable so the path can close on it
                if candidate in context.on_path and candidate != context.start_id:
                    continue
                if not self._mutual(context, node, candidate):
                    continue

                context.path.append(candidate)
                if candidate == context.start_id:
                    context.cycle_keys.add(canonical_cycle_key(context.path, self._key_delimiter))
                    context.path.pop()
                    continue

                context.on_path.add(candidate)
                stack.append((candidate, iter(context.candidates)))
                break
            else:
                stack.pop()
                context.on_path.discard(node)
                context.path.pop()
