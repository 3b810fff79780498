"""Thread-safe wrapper around DependencyStore."""

import threading
from typing import Mapping, Optional

from .engine import CPMEngine
from .models import CriticalPathNode, Dependency, DependencyType
from .store import DependencyStore


class SynchronizedDependencyStore:
    """
    Serializes every operation on a DependencyStore behind one lock.

    The cycle guard reads the whole graph, so two inserts checked against
    the same snapshot could jointly close a loop. Holding the lock across
    check and insert prevents that.
    """

    def __init__(self, store: DependencyStore = None, tolerance: float = None):
        self.store = store if store is not None else DependencyStore()
        self.engine = CPMEngine(self.store, tolerance=tolerance)
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Lock to hold when several calls must see the same snapshot."""
        return self._lock

    def create_dependency(self, from_task: str, to_task: str,
                          dependency_type: DependencyType, created_by: str) -> str:
        with self._lock:
            return self.store.create_dependency(from_task, to_task, dependency_type, created_by)

    def delete_dependency(self, dep_id: str) -> Optional[Dependency]:
        with self._lock:
            return self.store.delete_dependency(dep_id)

    def get_dependency(self, dep_id: str) -> Optional[Dependency]:
        with self._lock:
            return self.store.get_dependency(dep_id)

    def dependencies_for_task(self, task_id: str) -> list[Dependency]:
        with self._lock:
            return self.store.dependencies_for_task(task_id)

    def get_blockers(self, task_id: str) -> list[Dependency]:
        with self._lock:
            return self.store.get_blockers(task_id)

    def get_blocked(self, task_id: str) -> list[Dependency]:
        with self._lock:
            return self.store.get_blocked(task_id)

    def calculate_critical_path(self, durations: Mapping[str, float]) -> list[CriticalPathNode]:
        with self._lock:
            return self.engine.calculate_critical_path(durations)

    def get_critical_path(self, durations: Mapping[str, float]) -> list[str]:
        with self._lock:
            return self.engine.get_critical_path(durations)

    def detect_cycles(self) -> list[list[str]]:
        with self._lock:
            return self.store.detect_cycles()

    def __len__(self) -> int:
        with self._lock:
            return len(self.store)
