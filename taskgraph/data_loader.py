"""
Data Loader for dependency graphs.

Loads dependencies and task durations from CSV files into a
DependencyStore and duration map, and writes stores and computed
schedules back out.
"""

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd
from pydantic import ValidationError

from .cpm.models import CriticalPathNode, Dependency, DependencyType
from .cpm.store import DependencyStore
from .schemas import (
    DependencyRow,
    ScheduleRow,
    SchemaValidationError,
    TaskDurationRow,
    require_valid_dataframe,
    validated_df_to_csv,
)

logger = logging.getLogger(__name__)

# Identifier columns are read as text so '007' stays '007'
_DEPENDENCY_DTYPES = {
    'id': str,
    'from_task': str,
    'to_task': str,
    'dependency_type': str,
    'created_at': str,
    'created_by': str,
}


def load_durations(path: Path) -> dict[str, float]:
    """
    Load task durations.

    Args:
        path: CSV with task_id and duration_days columns

    Returns:
        Dict mapping task_id to duration in days, in file order
    """
    df = pd.read_csv(path, dtype={'task_id': str})
    require_valid_dataframe(df, TaskDurationRow, Path(path).name)

    durations: dict[str, float] = {}
    for line_no, (_, row) in enumerate(df.iterrows(), start=2):
        if pd.isna(row['task_id']):
            raise SchemaValidationError(
                f"Blank task_id at line {line_no} in '{Path(path).name}'",
                missing_columns=['task_id'],
            )
        task_id = str(row['task_id'])
        duration = float(row['duration_days']) if pd.notna(row['duration_days']) else 0.0

        if duration < 0:
            raise SchemaValidationError(
                f"Negative duration for task {task_id} in '{Path(path).name}': {duration}"
            )
        if task_id in durations:
            logger.warning(f"Duplicate duration for task {task_id}; keeping last value")

        durations[task_id] = duration

    logger.info(f"Loaded {len(durations)} task durations from {path}")
    return durations


def load_dependencies(
    path: Path,
    store: DependencyStore = None,
    check_cycles: bool = False,
) -> DependencyStore:
    """
    Load dependencies into a store.

    Rows are staged in a copy of the store and merged only once every row
    has loaded, so a failed load leaves the store unchanged.

    Args:
        path: CSV with DependencyRow columns
        store: Store to load into (default: a new one)
        check_cycles: If True, each row goes through create_dependency and
                      the cycle guard (ids are reassigned). Otherwise rows are
                      restored as-is and may contain cycles; audit them with
                      detect_cycles().

    Returns:
        The store holding the loaded dependencies

    Raises:
        SchemaValidationError: missing columns, blank required cells or an
            unknown dependency type
        CycleDetectedError: with check_cycles, a row would close a loop
        DuplicateDependencyError: a restored id is already in use
    """
    if store is None:
        store = DependencyStore()

    source = Path(path).name
    df = pd.read_csv(path, dtype=_DEPENDENCY_DTYPES)
    require_valid_dataframe(df, DependencyRow, source)

    staged = store.copy()

    for line_no, (_, row) in enumerate(df.iterrows(), start=2):
        record = {
            key: (row[key] if key in row and pd.notna(row[key]) else None)
            for key in DependencyRow.model_fields
        }
        try:
            DependencyRow.model_validate(record)
        except ValidationError as e:
            missing = sorted(str(err['loc'][0]) for err in e.errors())
            raise SchemaValidationError(
                f"Invalid row at line {line_no} in '{source}': blank or invalid {missing}",
                missing_columns=missing,
            )
        record['created_by'] = record['created_by'] or ''

        try:
            dependency_type = DependencyType.from_value(record['dependency_type'])
        except ValueError as e:
            raise SchemaValidationError(f"Invalid row {record['id']} in '{source}': {e}")

        if check_cycles:
            staged.create_dependency(
                record['from_task'], record['to_task'], dependency_type, record['created_by']
            )
        else:
            staged.restore_dependency(Dependency.from_dict(record))

    for dep in staged.all_dependencies():
        if dep.id not in store:
            store.restore_dependency(dep)

    logger.info(f"Loaded {len(df)} dependencies from {path}")
    return store


def dependencies_to_dataframe(dependencies: Iterable[Dependency]) -> pd.DataFrame:
    """Convert dependency records to a DataFrame with DependencyRow columns."""
    return pd.DataFrame(
        [dep.to_dict() for dep in dependencies],
        columns=list(DependencyRow.model_fields),
    )


def save_dependencies(store: DependencyStore, path: Path) -> Path:
    """Write all dependencies in a store to CSV."""
    df = dependencies_to_dataframe(store.all_dependencies())
    validated_df_to_csv(df.astype(str), path, schema=DependencyRow, index=False)
    logger.info(f"Saved {len(df)} dependencies to {path}")
    return Path(path)


def schedule_to_dataframe(nodes: Iterable[CriticalPathNode]) -> pd.DataFrame:
    """Convert CPM nodes to a DataFrame with ScheduleRow columns."""
    df = pd.DataFrame(
        [node.to_dict() for node in nodes],
        columns=list(ScheduleRow.model_fields),
    )
    return df.astype({'is_critical': bool})


def save_schedule(nodes: Iterable[CriticalPathNode], path: Path) -> Path:
    """Write a computed schedule report to CSV."""
    df = schedule_to_dataframe(nodes)
    validated_df_to_csv(df, path, schema=ScheduleRow, index=False)
    logger.info(f"Saved schedule for {len(df)} tasks to {path}")
    return Path(path)
