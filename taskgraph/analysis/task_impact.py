"""
Single Task Impact Analysis.

What-if analysis: how much does the project slip if one task's
duration changes?
"""

import logging
from typing import Mapping

from ..cpm.engine import CPMEngine
from ..cpm.models import TaskImpactResult
from ..cpm.store import DependencyStore

logger = logging.getLogger(__name__)


def analyze_task_impact(
    store: DependencyStore,
    durations: Mapping[str, float],
    task_id: str,
    duration_delta: float = 5.0,
) -> TaskImpactResult:
    """
    Analyze the impact of changing a single task's duration.

    Args:
        store: Dependency store
        durations: Mapping of task_id to duration in days
        task_id: Task to modify
        duration_delta: Days to add to the task (negative to shorten,
                        clamped so the duration stays >= 0)

    Returns:
        TaskImpactResult with slip and critical path changes

    Raises:
        KeyError: If task_id is not in durations
    """
    if task_id not in durations:
        raise KeyError(f"Task {task_id} not in duration map")

    engine = CPMEngine(store)
    original = engine.run(durations)

    modified = dict(durations)
    modified[task_id] = max(0.0, durations[task_id] + duration_delta)
    new = engine.run(modified)

    slip = new.project_duration - original.project_duration

    # Tasks whose earliest start moved
    affected = []
    for node in new.nodes:
        before = original.get_node(node.task_id)
        if before is not None and abs(node.earliest_start - before.earliest_start) > engine.tolerance:
            affected.append(node.task_id)

    return TaskImpactResult(
        task_id=task_id,
        duration_delta=modified[task_id] - durations[task_id],
        original_project_duration=original.project_duration,
        new_project_duration=new.project_duration,
        slip=slip,
        affected_task_ids=affected,
        original_critical_path=original.critical_path,
        new_critical_path=new.critical_path,
        critical_path_changed=original.critical_path != new.critical_path,
    )


def analyze_task_sensitivity(
    store: DependencyStore,
    durations: Mapping[str, float],
    task_ids: list[str] = None,
    duration_delta: float = 5.0,
) -> list[TaskImpactResult]:
    """
    Analyze impact for multiple tasks.

    Args:
        store: Dependency store
        durations: Mapping of task_id to duration in days
        task_ids: Tasks to analyze (default: all tasks with non-zero duration)
        duration_delta: Days to add to each task

    Returns:
        List of TaskImpactResult sorted by slip (descending)
    """
    if task_ids is None:
        task_ids = [tid for tid, duration in durations.items() if duration > 0]

    results = []
    for task_id in task_ids:
        if task_id not in durations:
            logger.warning(f"Skipping {task_id}: no duration estimate")
            continue
        results.append(analyze_task_impact(store, durations, task_id, duration_delta))

    results.sort(key=lambda r: r.slip, reverse=True)
    return results
