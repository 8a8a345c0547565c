"""
Concurrency management for the swap graph.

Cycle counts only read the registries, so any number of them may run at
once. Enrollment changes are refused while a count is in progress, and a
count started during an enrollment change waits for it to finish.
"""

import threading
import time
import uuid
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from ..core.enums import LockType
from ..core.exceptions import ConcurrencyError

GRAPH_RESOURCE = "swap_graph"


@dataclass
class LockInfo:
    """Information about a held lock."""
    lock_id: str
    resource_id: str
    lock_type: LockType
    holder_id: str
    acquired_at: float


class ConcurrencyManager:
    """Manages read/write locks and version counters per resource."""

    def __init__(self):
        self._locks: Dict[str, Dict[LockType, Set[str]]] = defaultdict(lambda: defaultdict(set))
        self._lock_holders: Dict[str, LockInfo] = {}
        self._version_tracker: Dict[str, int] = {}
        self._lock = threading.RLock()
        self._released = threading.Condition(self._lock)

    def acquire_lock(self, resource_id: str, lock_type: LockType, holder_id: str,
                     blocking: bool = False, timeout: Optional[float] = None) -> str:
        """Acquire a lock on a resource.

        Non-blocking acquisitions fail at once on a conflict. Blocking ones
        wait until the conflicting locks are released, or until ``timeout``
        seconds have passed when one is given.
        """
        with self._lock:
            if blocking:
                acquired = self._released.wait_for(
                    lambda: self._can_acquire_lock(resource_id, lock_type, holder_id),
                    timeout=timeout
                )
            else:
                acquired = self._can_acquire_lock(resource_id, lock_type, holder_id)

            if not acquired:
                raise ConcurrencyError(
                    f"Cannot acquire {lock_type.value} lock on {resource_id}",
                    error_code="lock_conflict",
                    details={'resource_id': resource_id, 'holder_id': holder_id},
                )

            lock_id = str(uuid.uuid4())
            self._locks[resource_id][lock_type].add(lock_id)
            self._lock_holders[lock_id] = LockInfo(
                lock_id=lock_id,
                resource_id=resource_id,
                lock_type=lock_type,
                holder_id=holder_id,
                acquired_at=time.time(),
            )
            return lock_id

    def release_lock(self, lock_id: str) -> bool:
        """Release a lock and wake any waiting acquirers."""
        with self._lock:
            if lock_id not in self._lock_holders:
                return False

            lock_info = self._lock_holders.pop(lock_id)
            resource_id = lock_info.resource_id
            lock_type = lock_info.lock_type

            self._locks[resource_id][lock_type].discard(lock_id)

            # Clean up empty lock types and resources
            if not self._locks[resource_id][lock_type]:
                del self._locks[resource_id][lock_type]
            if not self._locks[resource_id]:
                del self._locks[resource_id]

            self._released.notify_all()
            return True

    def _can_acquire_lock(self, resource_id: str, lock_type: LockType, holder_id: str) -> bool:
        """Check if a lock can be acquired."""
        if resource_id not in self._locks:
            return True
        existing_locks = self._locks[resource_id]

        # Same holder can acquire multiple locks
        for lock_ids in existing_locks.values():
            for lock_id in lock_ids:
                if self._lock_holders[lock_id].holder_id == holder_id:
                    return True

        if lock_type == LockType.READ:
            return LockType.WRITE not in existing_locks
        return not any(existing_locks.values())

    @contextmanager
    def lock(self, resource_id: str, lock_type: LockType, holder_id: str,
             blocking: bool = False, timeout: Optional[float] = None):
        """Context manager for acquiring and releasing locks."""
        lock_id = None
        try:
            lock_id = self.acquire_lock(resource_id, lock_type, holder_id, blocking, timeout)
            yield lock_id
        finally:
            if lock_id:
                self.release_lock(lock_id)

    def get_version(self, resource_id: str) -> int:
        """Get current version of a resource."""
        with self._lock:
            return self._version_tracker.get(resource_id, 0)

    def increment_version(self, resource_id: str) -> int:
        """Increment version of a resource."""
        with self._lock:
            new_version = self._version_tracker.get(resource_id, 0) + 1
            self._version_tracker[resource_id] = new_version
            return new_version

    def get_lock_info(self, resource_id: str) -> List[LockInfo]:
        """Get information about all locks on a resource."""
        with self._lock:
            if resource_id not in self._locks:
                return []
            return [
                self._lock_holders[lock_id]
                for lock_ids in self._locks[resource_id].values()
                for lock_id in lock_ids
            ]

