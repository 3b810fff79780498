"""
CPM (Critical Path Method) Engine.

Implements forward and backward pass calculations over the blocking
dependencies held in a DependencyStore.
"""

import logging
from collections import deque
from typing import Mapping

from ..config.settings import settings
from .models import CriticalPathNode, CPMResult
from .store import DependencyStore

logger = logging.getLogger(__name__)


def topological_sort(store: DependencyStore, durations: Mapping[str, float]) -> list[str]:
    """
    Return task IDs in topological order (blockers before blocked tasks).

    Only tasks that are keys of durations and Blocks dependencies between
    them are considered. Uses Kahn's algorithm; tasks caught in a cycle
    are left out of the result.
    """
    in_degree = {tid: 0 for tid in durations}
    successors: dict[str, list[str]] = {tid: [] for tid in durations}

    for dep in store.all_dependencies():
        if not dep.is_blocks():
            continue
        if dep.from_task not in in_degree or dep.to_task not in in_degree:
            continue
        in_degree[dep.to_task] += 1
        successors[dep.from_task].append(dep.to_task)

    # Start with tasks that have no blockers
    queue = deque(tid for tid, deg in in_degree.items() if deg == 0)
    result = []

    while queue:
        task_id = queue.popleft()
        result.append(task_id)

        for succ_id in successors[task_id]:
            in_degree[succ_id] -= 1
            if in_degree[succ_id] == 0:
                queue.append(succ_id)

    return result


class CPMEngine:
    """
    CPM calculation engine.

    Performs forward pass (earliest starts), backward pass (latest starts),
    slack calculation and critical path identification. Nothing is cached:
    every call recomputes from the durations given and the current store.
    """

    def __init__(self, store: DependencyStore, tolerance: float = None):
        """
        Initialize CPM engine.

        Args:
            store: Dependency store to read relationships from
            tolerance: Slack (in days) below which a task counts as critical
        """
        self.store = store
        self.tolerance = tolerance if tolerance is not None else settings.CRITICAL_TOLERANCE

    def topological_sort(self, durations: Mapping[str, float]) -> list[str]:
        return topological_sort(self.store, durations)

    def forward_pass(self, nodes: dict[str, CriticalPathNode], task_order: list[str]) -> None:
        """Set earliest_start from the latest earliest_finish among blockers."""
        for task_id in task_order:
            max_finish = 0.0
            for dep in self.store.get_blockers(task_id):
                blocker = nodes.get(dep.other_task(task_id))
                if blocker is not None:
                    max_finish = max(max_finish, blocker.earliest_finish)
            nodes[task_id].earliest_start = max_finish

    def backward_pass(self, nodes: dict[str, CriticalPathNode], task_order: list[str],
                      project_duration: float) -> None:
        """Set latest_start, slack and the critical flag in reverse order."""
        for task_id in reversed(task_order):
            node = nodes[task_id]
            successor_starts = [
                nodes[other].latest_start
                for other in (dep.other_task(task_id) for dep in self.store.get_blocked(task_id))
                if other in nodes
            ]

            if successor_starts:
                node.latest_start = min(successor_starts) - node.duration
            else:
                # No successors - can finish at project end
                node.latest_start = project_duration - node.duration

            node.update_slack(self.tolerance)

    def run(self, durations: Mapping[str, float]) -> CPMResult:
        """
        Execute full CPM calculation.

        Args:
            durations: Mapping of task_id to duration (days). Its keys are
                       the complete set of tasks to schedule.

        Returns:
            CPMResult with nodes in topological order
        """
        nodes = {
            task_id: CriticalPathNode(task_id=task_id, duration=float(duration))
            for task_id, duration in durations.items()
        }

        task_order = self.topological_sort(durations)
        self.forward_pass(nodes, task_order)

        project_duration = max((n.earliest_finish for n in nodes.values()), default=0.0)

        self.backward_pass(nodes, task_order, project_duration)

        ordered = [nodes[tid] for tid in task_order]
        if len(task_order) != len(nodes):
            seen = set(task_order)
            unordered = [node for tid, node in nodes.items() if tid not in seen]
            logger.warning(
                f"{len(unordered)} tasks could not be ordered (circular dependency): "
                f"{[n.task_id for n in unordered][:5]}"
            )
            ordered.extend(unordered)

        # Only possible when a BlockedBy blocker was ordered after its dependent
        negative = [n.task_id for n in ordered if n.slack <= -self.tolerance]
        if negative:
            logger.warning(
                f"{len(negative)} tasks have negative slack; Blocked By links are not "
                f"used for ordering, so these results depend on duration map order: "
                f"{negative[:5]}"
            )

        return CPMResult(
            nodes=ordered,
            critical_path=[n.task_id for n in ordered if n.is_critical],
            task_order=task_order,
            project_duration=project_duration,
        )

    def calculate_critical_path(self, durations: Mapping[str, float]) -> list[CriticalPathNode]:
        """Compute CPM values for every task in durations."""
        return self.run(durations).nodes

    def get_critical_path(self, durations: Mapping[str, float]) -> list[str]:
        """
        Return task IDs on the critical path in execution order.

        Critical tasks are those with |slack| below the tolerance.
        """
        return self.run(durations).critical_path
