"""
Task dependency and critical path engine.

Models Blocks / BlockedBy / RelatesTo / Duplicates relationships between
tasks, refuses blocking relationships that would form a loop, and computes
CPM schedules (earliest/latest start, slack, critical path) on demand.

Usage:
    from taskgraph import DependencyStore, DependencyType, CPMEngine

    store = DependencyStore()
    store.create_dependency('design', 'build', DependencyType.BLOCKS, 'alice')
    CPMEngine(store).get_critical_path({'design': 3.0, 'build': 5.0})
"""

from .cpm import (
    DependencyType,
    Dependency,
    CriticalPathNode,
    CPMResult,
    CriticalPathResult,
    TaskImpactResult,
    DependencyError,
    CycleDetectedError,
    DependencyNotFoundError,
    SelfReferenceError,
    DuplicateDependencyError,
    DependencyStore,
    SynchronizedDependencyStore,
    CPMEngine,
    topological_sort,
    detect_cycles,
)
from .analysis import (
    analyze_critical_path,
    analyze_task_impact,
    analyze_task_sensitivity,
)
from .data_loader import load_dependencies, load_durations, save_dependencies, save_schedule

__version__ = '0.1.0'

__all__ = [
    # Models
    'DependencyType',
    'Dependency',
    'CriticalPathNode',
    'CPMResult',
    'CriticalPathResult',
    'TaskImpactResult',
    # Errors
    'DependencyError',
    'CycleDetectedError',
    'DependencyNotFoundError',
    'SelfReferenceError',
    'DuplicateDependencyError',
    # Core
    'DependencyStore',
    'SynchronizedDependencyStore',
    'CPMEngine',
    'topological_sort',
    'detect_cycles',
    # Analysis
    'analyze_critical_path',
    'analyze_task_impact',
    'analyze_task_sensitivity',
    # Loading
    'load_dependencies',
    'load_durations',
    'save_dependencies',
    'save_schedule',
]
