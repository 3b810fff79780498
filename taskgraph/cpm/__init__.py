"""
CPM (Critical Path Method) engine for task dependency graphs.

This module provides:
- Dependency types and immutable dependency records
- A dependency store with inline cycle prevention
- Whole-graph cycle detection
- Topological sorting and forward/backward pass CPM calculations
"""

from .models import (
    DependencyType,
    Dependency,
    CriticalPathNode,
    CPMResult,
    CriticalPathResult,
    TaskImpactResult,
)
from .errors import (
    DependencyError,
    CycleDetectedError,
    DependencyNotFoundError,
    SelfReferenceError,
    DuplicateDependencyError,
)
from .cycles import detect_cycles, find_path, has_path
from .store import DependencyStore
from .engine import CPMEngine, topological_sort
from .sync import SynchronizedDependencyStore

__all__ = [
    'DependencyType',
    'Dependency',
    'CriticalPathNode',
    'CPMResult',
    'CriticalPathResult',
    'TaskImpactResult',
    'DependencyError',
    'CycleDetectedError',
    'DependencyNotFoundError',
    'SelfReferenceError',
    'DuplicateDependencyError',
    'detect_cycles',
    'find_path',
    'has_path',
    'DependencyStore',
    'CPMEngine',
    'topological_sort',
    'SynchronizedDependencyStore',
]
