"""
Computed schedule report schema.

Written by `taskgraph schedule --output`.
"""

from pydantic import BaseModel, Field


class ScheduleRow(BaseModel):
    """
    CPM values for one task. Recomputed on every run, never read back.

    File: schedule.csv
    """
    task_id: str = Field(description="Task ID")
    duration: float = Field(description="Duration in days")
    earliest_start: float = Field(description="Earliest start (days from project start)")
    earliest_finish: float = Field(description="Earliest finish")
    latest_start: float = Field(description="Latest start without delaying the project")
    latest_finish: float = Field(description="Latest finish")
    slack: float = Field(description="latest_start - earliest_start")
    is_critical: bool = Field(description="Slack within tolerance of zero")
