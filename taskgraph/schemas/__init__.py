"""
CSV schemas for dependency, duration and schedule files.

Usage:
    from taskgraph.schemas import validate_dataframe, DependencyRow

    errors = validate_dataframe(df, DependencyRow)
"""

from .dependencies import DependencyRow, TaskDurationRow
from .schedule import ScheduleRow
from .validator import (
    validate_dataframe,
    require_valid_dataframe,
    validated_df_to_csv,
    SchemaValidationError,
)
from .registry import SCHEMA_REGISTRY, get_schema_for_file

__all__ = [
    'DependencyRow',
    'TaskDurationRow',
    'ScheduleRow',
    'validate_dataframe',
    'require_valid_dataframe',
    'validated_df_to_csv',
    'SchemaValidationError',
    'SCHEMA_REGISTRY',
    'get_schema_for_file',
]
