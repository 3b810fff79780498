"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
from typing import Dict

import pandas as pd

from taskgraph.cpm.models import Dependency, DependencyType
from taskgraph.cpm.store import DependencyStore


@pytest.fixture
def store() -> DependencyStore:
    """Empty dependency store with the default id prefix."""
    return DependencyStore(id_prefix='dep-')


@pytest.fixture
def chain_store(store) -> DependencyStore:
    """task-1 blocks task-2 blocks task-3."""
    store.create_dependency('task-1', 'task-2', DependencyType.BLOCKS, 'user-1')
    store.create_dependency('task-2', 'task-3', DependencyType.BLOCKS, 'user-1')
    return store


@pytest.fixture
def diamond_store(store) -> DependencyStore:
    """A blocks B and C; B and C both block D."""
    store.create_dependency('A', 'B', DependencyType.BLOCKS, 'user-1')
    store.create_dependency('A', 'C', DependencyType.BLOCKS, 'user-1')
    store.create_dependency('B', 'D', DependencyType.BLOCKS, 'user-1')
    store.create_dependency('C', 'D', DependencyType.BLOCKS, 'user-1')
    return store


@pytest.fixture
def diamond_durations() -> Dict[str, float]:
    return {'A': 2.0, 'B': 3.0, 'C': 1.0, 'D': 2.0}


@pytest.fixture
def parallel_store(store) -> DependencyStore:
    """task-1 and task-2 both block task-3."""
    store.create_dependency('task-1', 'task-3', DependencyType.BLOCKS, 'user-1')
    store.create_dependency('task-2', 'task-3', DependencyType.BLOCKS, 'user-1')
    return store


@pytest.fixture
def parallel_durations() -> Dict[str, float]:
    return {'task-1': 5.0, 'task-2': 2.0, 'task-3': 1.0}


@pytest.fixture
def cyclic_store(store) -> DependencyStore:
    """A -> B -> C -> A restored without the cycle guard, as an import would."""
    for i, (src, dst) in enumerate([('A', 'B'), ('B', 'C'), ('C', 'A')], start=1):
        store.restore_dependency(Dependency(
            id=f'dep-{i}',
            from_task=src,
            to_task=dst,
            dependency_type=DependencyType.BLOCKS,
            created_by='import',
        ))
    return store


@pytest.fixture
def dependencies_csv(tmp_path) -> Path:
    """Dependencies CSV with a diamond and one informational link."""
    path = tmp_path / 'dependencies.csv'
    pd.DataFrame([
        {'id': 'dep-1', 'from_task': 'A', 'to_task': 'B', 'dependency_type': 'blocks',
         'created_at': '2025-01-01T09:00:00+00:00', 'created_by': 'alice'},
        {'id': 'dep-2', 'from_task': 'A', 'to_task': 'C', 'dependency_type': 'blocks',
         'created_at': '2025-01-01T09:05:00+00:00', 'created_by': 'alice'},
        {'id': 'dep-3', 'from_task': 'B', 'to_task': 'D', 'dependency_type': 'blocks',
         'created_at': '2025-01-02T10:00:00+00:00', 'created_by': 'bob'},
        {'id': 'dep-4', 'from_task': 'C', 'to_task': 'D', 'dependency_type': 'blocks',
         'created_at': '2025-01-02T10:30:00+00:00', 'created_by': 'bob'},
        {'id': 'dep-5', 'from_task': 'D', 'to_task': 'A', 'dependency_type': 'relates_to',
         'created_at': '2025-01-03T08:00:00+00:00', 'created_by': 'carol'},
    ]).to_csv(path, index=False)
    return path


@pytest.fixture
def durations_csv(tmp_path) -> Path:
    path = tmp_path / 'durations.csv'
    pd.DataFrame([
        {'task_id': 'A', 'duration_days': 2.0},
        {'task_id': 'B', 'duration_days': 3.0},
        {'task_id': 'C', 'duration_days': 1.0},
        {'task_id': 'D', 'duration_days': 2.0},
    ]).to_csv(path, index=False)
    return path


@pytest.fixture
def cyclic_dependencies_csv(tmp_path) -> Path:
    path = tmp_path / 'cyclic.csv'
    pd.DataFrame([
        {'id': 'dep-1', 'from_task': 'A', 'to_task': 'B', 'dependency_type': 'blocks',
         'created_at': '2025-01-01T09:00:00+00:00', 'created_by': 'import'},
        {'id': 'dep-2', 'from_task': 'B', 'to_task': 'C', 'dependency_type': 'blocks',
         'created_at': '2025-01-01T09:00:00+00:00', 'created_by': 'import'},
        {'id': 'dep-3', 'from_task': 'C', 'to_task': 'A', 'dependency_type': 'blocks',
         'created_at': '2025-01-01T09:00:00+00:00', 'created_by': 'import'},
    ]).to_csv(path, index=False)
    return path
