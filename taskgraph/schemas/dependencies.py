"""
Dependency graph table schemas.

Files: dependencies.csv, durations.csv
"""

from typing import Optional
from pydantic import BaseModel, Field


class DependencyRow(BaseModel):
    """
    One stored dependency between two tasks.

    File: dependencies.csv
    """
    id: str = Field(description="Dependency identifier (e.g. dep-12)")
    from_task: str = Field(description="Source task ID")
    to_task: str = Field(description="Target task ID")
    dependency_type: str = Field(description="blocks, blocked_by, relates_to or duplicates")
    created_at: Optional[str] = Field(default=None, description="ISO-8601 creation timestamp")
    created_by: Optional[str] = Field(default=None, description="User who created the dependency")


class TaskDurationRow(BaseModel):
    """
    Duration estimate for one task.

    File: durations.csv
    """
    task_id: str = Field(description="Task ID")
    duration_days: float = Field(ge=0, description="Estimated duration in days")
