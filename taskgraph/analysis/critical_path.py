"""
Critical Path Analysis.

Identifies critical and near-critical tasks, analyzes slack distribution,
and reports schedule risk.
"""

from collections import defaultdict
from typing import Mapping

from ..config.settings import settings
from ..cpm.engine import CPMEngine
from ..cpm.models import CriticalPathResult
from ..cpm.store import DependencyStore


def analyze_critical_path(
    store: DependencyStore,
    durations: Mapping[str, float],
    near_critical_threshold: float = None,
) -> CriticalPathResult:
    """
    Analyze critical path and near-critical tasks.

    Args:
        store: Dependency store to analyze
        durations: Mapping of task_id to duration in days
        near_critical_threshold: Slack (days) at or below which a
                                 non-critical task counts as near-critical

    Returns:
        CriticalPathResult with critical path, near-critical tasks, and statistics
    """
    if near_critical_threshold is None:
        near_critical_threshold = settings.NEAR_CRITICAL_DAYS

    result = CPMEngine(store).run(durations)

    critical = []
    near_critical = []
    float_buckets = defaultdict(int)

    for node in result.nodes:
        if node.is_critical:
            critical.append(node)
            float_buckets['0 (critical)'] += 1
            continue

        if node.slack <= near_critical_threshold:
            near_critical.append(node)

        if node.slack <= 1:
            float_buckets['<= 1 day'] += 1
        elif node.slack <= 5:
            float_buckets['1-5 days'] += 1
        elif node.slack <= 10:
            float_buckets['5-10 days'] += 1
        elif node.slack <= 20:
            float_buckets['10-20 days'] += 1
        else:
            float_buckets['> 20 days'] += 1

    near_critical.sort(key=lambda n: n.slack)

    return CriticalPathResult(
        critical_path=critical,
        near_critical_tasks=near_critical,
        float_distribution=dict(float_buckets),
        project_duration=result.project_duration,
        near_critical_threshold=near_critical_threshold,
        total_tasks=len(result.nodes),
    )


def print_critical_path_report(result: CriticalPathResult) -> None:
    """Print a formatted critical path report."""
    print("=" * 80)
    print("CRITICAL PATH ANALYSIS REPORT")
    print("=" * 80)

    print(f"\nProject Duration: {result.project_duration:.1f} days")
    print(f"Total Tasks: {result.total_tasks}")
    print(f"Critical Tasks: {len(result.critical_path)}")
    print(f"Near-Critical Tasks (<= {result.near_critical_threshold:g} days slack): "
          f"{len(result.near_critical_tasks)}")

    print("\n--- Slack Distribution ---")
    for bucket, count in sorted(result.float_distribution.items()):
        pct = count / result.total_tasks * 100 if result.total_tasks else 0
        bar = '#' * int(pct / 2)
        print(f"  {bucket:15s}: {count:5d} ({pct:5.1f}%) {bar}")

    print("\n--- Critical Path (first 20 tasks) ---")
    for i, node in enumerate(result.critical_path[:20]):
        print(f"  {i+1:3d}. {node.task_id:30s} | start {node.earliest_start:7.1f} | "
              f"{node.duration:.1f}d")

    if len(result.critical_path) > 20:
        print(f"  ... and {len(result.critical_path) - 20} more critical tasks")

    print("\n--- Near-Critical Tasks (first 10) ---")
    for i, node in enumerate(result.near_critical_tasks[:10]):
        print(f"  {i+1:3d}. {node.task_id:30s} | Slack: {node.slack:5.1f}d")

    print("\n" + "=" * 80)
