"""
Dependency store for task relationships.

Keeps dependency records by id plus a per-task index covering both
endpoints of every edge, so lookups from either side are cheap.
"""

import logging
import re
from collections import defaultdict
from typing import Optional

from ..config.settings import settings
from .cycles import detect_cycles, find_path
from .errors import (
    CycleDetectedError,
    DependencyNotFoundError,
    DuplicateDependencyError,
    SelfReferenceError,
)
from .models import Dependency, DependencyType

logger = logging.getLogger(__name__)


class DependencyStore:
    """
    Store of dependencies between tasks.

    Every stored dependency id is listed in the index of both its
    from_task and its to_task. Blocking dependencies pass through the
    cycle guard before they are inserted.
    """

    def __init__(self, id_prefix: str = None):
        self.id_prefix = id_prefix if id_prefix is not None else settings.DEPENDENCY_ID_PREFIX
        self._dependencies: dict[str, Dependency] = {}
        self._task_index: dict[str, list[str]] = defaultdict(list)
        self._next_id = 1

    def create_dependency(
        self,
        from_task: str,
        to_task: str,
        dependency_type: DependencyType,
        created_by: str,
    ) -> str:
        """
        Create a dependency and return its id.

        Raises:
            CycleDetectedError: a blocking dependency would close a loop.
                The store is left unchanged.
            SelfReferenceError: an informational dependency points at its
                own task.
        """
        if dependency_type.affects_scheduling():
            path = self.would_create_cycle(from_task, to_task, dependency_type)
            if path is not None:
                logger.warning(
                    f"Rejected {dependency_type.label} dependency {from_task} -> {to_task}: "
                    f"existing path {' -> '.join(path)}"
                )
                raise CycleDetectedError(from_task, to_task, dependency_type, path)
        elif from_task == to_task:
            raise SelfReferenceError(from_task, dependency_type)

        dep_id = f"{self.id_prefix}{self._next_id}"
        self._next_id += 1

        dep = Dependency(
            id=dep_id,
            from_task=from_task,
            to_task=to_task,
            dependency_type=dependency_type,
            created_by=created_by,
        )
        self._insert(dep)
        logger.debug(f"Created {dep_id}: {from_task} {dependency_type.label} {to_task}")
        return dep_id

    def restore_dependency(self, dep: Dependency) -> None:
        """
        Insert an existing dependency record without running the cycle guard.

        Used when importing stored state. The id counter is advanced past
        any numeric suffix carrying this store's prefix.
        """
        if dep.id in self._dependencies:
            raise DuplicateDependencyError(dep.id)

        match = re.fullmatch(re.escape(self.id_prefix) + r'(\d+)', dep.id)
        if match:
            self._next_id = max(self._next_id, int(match.group(1)) + 1)

        self._insert(dep)

    def copy(self) -> 'DependencyStore':
        """Independent store holding the same records and the same next id."""
        clone = DependencyStore(id_prefix=self.id_prefix)
        for dep in self._dependencies.values():
            clone._insert(dep)
        clone._next_id = self._next_id
        return clone

    def _insert(self, dep: Dependency) -> None:
        self._dependencies[dep.id] = dep
        self._task_index[dep.from_task].append(dep.id)
        if dep.to_task != dep.from_task:
            self._task_index[dep.to_task].append(dep.id)

    def would_create_cycle(
        self,
        from_task: str,
        to_task: str,
        dependency_type: DependencyType,
    ) -> Optional[list[str]]:
        """
        Return the existing path that a new dependency would close, or None.

        Adding "from blocks to" closes a loop if to already reaches from.
        Adding "from blocked by to" closes a loop if from already reaches to.
        """
        if dependency_type is DependencyType.BLOCKS:
            return find_path(self, to_task, from_task)
        if dependency_type is DependencyType.BLOCKED_BY:
            return find_path(self, from_task, to_task)
        return None

    def delete_dependency(self, dep_id: str) -> Optional[Dependency]:
        """Remove a dependency. Returns the removed record, or None if unknown."""
        dep = self._dependencies.pop(dep_id, None)
        if dep is None:
            return None

        for task_id in (dep.from_task, dep.to_task):
            ids = self._task_index.get(task_id)
            if ids is None:
                continue
            ids[:] = [i for i in ids if i != dep_id]
            if not ids:
                del self._task_index[task_id]

        logger.debug(f"Deleted {dep_id}")
        return dep

    def get_dependency(self, dep_id: str) -> Optional[Dependency]:
        """Get a dependency by ID."""
        return self._dependencies.get(dep_id)

    def require_dependency(self, dep_id: str) -> Dependency:
        """Get a dependency by ID, raising DependencyNotFoundError if unknown."""
        dep = self._dependencies.get(dep_id)
        if dep is None:
            raise DependencyNotFoundError(dep_id)
        return dep

    def all_dependencies(self) -> list[Dependency]:
        """All dependencies in creation order."""
        return list(self._dependencies.values())

    def task_ids(self) -> list[str]:
        """Tasks referenced by at least one dependency."""
        return list(self._task_index.keys())

    def dependencies_for_task(self, task_id: str) -> list[Dependency]:
        """Get all dependencies touching a task, in either direction."""
        return [
            self._dependencies[dep_id]
            for dep_id in self._task_index.get(task_id, [])
            if dep_id in self._dependencies
        ]

    def get_blockers(self, task_id: str) -> list[Dependency]:
        """Get dependencies naming tasks that must finish before task_id starts."""
        return [
            dep for dep in self.dependencies_for_task(task_id)
            if (dep.to_task == task_id and dep.is_blocks())
            or (dep.from_task == task_id and dep.is_blocked_by())
        ]

    def get_blocked(self, task_id: str) -> list[Dependency]:
        """Get dependencies naming tasks that cannot start until task_id finishes."""
        return [
            dep for dep in self.dependencies_for_task(task_id)
            if (dep.from_task == task_id and dep.is_blocks())
            or (dep.to_task == task_id and dep.is_blocked_by())
        ]

    def get_blocked_tasks(self, task_id: str) -> list[str]:
        """Get task IDs that task_id blocks through Blocks dependencies only."""
        return [
            dep.to_task for dep in self.dependencies_for_task(task_id)
            if dep.from_task == task_id and dep.is_blocks()
        ]

    def get_all_predecessors(self, task_id: str, include_self: bool = False) -> set[str]:
        """Get all tasks that must finish before task_id (transitive closure)."""
        return self._closure(task_id, self.get_blockers, include_self)

    def get_all_successors(self, task_id: str, include_self: bool = False) -> set[str]:
        """Get all tasks waiting on task_id (transitive closure)."""
        return self._closure(task_id, self.get_blocked, include_self)

    def _closure(self, task_id: str, neighbours, include_self: bool) -> set[str]:
        result = set()
        if include_self:
            result.add(task_id)

        visited = set()
        queue = [task_id]

        while queue:
            current = queue.pop(0)
            if current in visited:
                continue
            visited.add(current)

            for dep in neighbours(current):
                other = dep.other_task(current)
                result.add(other)
                queue.append(other)

        return result

    def detect_cycles(self) -> list[list[str]]:
        """Scan the whole stored graph for Blocks cycles."""
        return detect_cycles(self)

    def get_statistics(self) -> dict:
        """Get store statistics."""
        by_type = defaultdict(int)
        for dep in self._dependencies.values():
            by_type[dep.dependency_type.value] += 1

        return {
            'total_dependencies': len(self._dependencies),
            'total_tasks': len(self._task_index),
            'scheduling_dependencies': sum(
                1 for dep in self._dependencies.values()
                if dep.dependency_type.affects_scheduling()
            ),
            'by_type': dict(by_type),
        }

    def __len__(self) -> int:
        return len(self._dependencies)

    def __contains__(self, dep_id: str) -> bool:
        return dep_id in self._dependencies

    def __repr__(self) -> str:
        return (f"DependencyStore({len(self._dependencies)} dependencies, "
                f"{len(self._task_index)} tasks)")
