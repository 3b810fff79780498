"""
Data models for dependency tracking and CPM calculations.

Defines the dependency type classification, dependency records,
and the transient result objects produced by the CPM engine.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class DependencyType(Enum):
    """Kind of relationship between two tasks."""

    BLOCKS = 'blocks'            # from_task must finish before to_task starts
    BLOCKED_BY = 'blocked_by'    # from_task cannot start until to_task finishes
    RELATES_TO = 'relates_to'    # informational link
    DUPLICATES = 'duplicates'

    @property
    def label(self) -> str:
        """Human readable name."""
        return _LABELS[self]

    def inverse(self) -> Optional['DependencyType']:
        """Return the mirror type, or None when the type has no mirror."""
        if self is DependencyType.BLOCKS:
            return DependencyType.BLOCKED_BY
        if self is DependencyType.BLOCKED_BY:
            return DependencyType.BLOCKS
        if self is DependencyType.RELATES_TO:
            return DependencyType.RELATES_TO
        # Duplicates is not bidirectional
        return None

    def affects_scheduling(self) -> bool:
        """Only blocking relationships take part in cycle checks and CPM."""
        return self in (DependencyType.BLOCKS, DependencyType.BLOCKED_BY)

    @classmethod
    def from_value(cls, value) -> 'DependencyType':
        """
        Parse a dependency type from its value, member name or label.

        Accepts 'blocks', 'BLOCKED_BY', 'Relates To', etc.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        normalized = text.lower().replace(' ', '_').replace('-', '_')
        for member in cls:
            if normalized in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown dependency type: {value!r}")


_LABELS = {
    DependencyType.BLOCKS: 'Blocks',
    DependencyType.BLOCKED_BY: 'Blocked By',
    DependencyType.RELATES_TO: 'Relates To',
    DependencyType.DUPLICATES: 'Duplicates',
}


@dataclass(frozen=True)
class Dependency:
    """A directed relationship between two tasks. Immutable once created."""

    id: str
    from_task: str
    to_task: str
    dependency_type: DependencyType
    created_by: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_blocks(self) -> bool:
        return self.dependency_type is DependencyType.BLOCKS

    def is_blocked_by(self) -> bool:
        return self.dependency_type is DependencyType.BLOCKED_BY

    def involves(self, task_id: str) -> bool:
        return task_id in (self.from_task, self.to_task)

    def other_task(self, task_id: str) -> str:
        """Return the endpoint opposite to task_id."""
        if task_id == self.from_task:
            return self.to_task
        if task_id == self.to_task:
            return self.from_task
        raise ValueError(f"Task {task_id} is not an endpoint of dependency {self.id}")

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'from_task': self.from_task,
            'to_task': self.to_task,
            'dependency_type': self.dependency_type.value,
            'created_at': self.created_at.isoformat(),
            'created_by': self.created_by,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Dependency':
        created_at = data.get('created_at')
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        return cls(
            id=str(data['id']),
            from_task=str(data['from_task']),
            to_task=str(data['to_task']),
            dependency_type=DependencyType.from_value(data['dependency_type']),
            created_by=str(data.get('created_by', '')),
            created_at=created_at,
        )


@dataclass
class CriticalPathNode:
    """Per-task CPM values. Durations and times are in days from project start."""

    task_id: str
    duration: float
    earliest_start: float = 0.0
    latest_start: float = 0.0
    slack: float = 0.0
    is_critical: bool = False

    @property
    def earliest_finish(self) -> float:
        return self.earliest_start + self.duration

    @property
    def latest_finish(self) -> float:
        return self.latest_start + self.duration

    def update_slack(self, tolerance: float = 0.01) -> None:
        """Recompute slack and the critical flag from the start times."""
        self.slack = self.latest_start - self.earliest_start
        self.is_critical = abs(self.slack) < tolerance

    def to_dict(self) -> dict:
        return {
            'task_id': self.task_id,
            'duration': self.duration,
            'earliest_start': self.earliest_start,
            'earliest_finish': self.earliest_finish,
            'latest_start': self.latest_start,
            'latest_finish': self.latest_finish,
            'slack': self.slack,
            'is_critical': self.is_critical,
        }


@dataclass
class CPMResult:
    """Results from a CPM calculation."""

    nodes: list[CriticalPathNode]
    critical_path: list[str]       # task_ids in execution order
    task_order: list[str]          # topological order used by the passes
    project_duration: float

    def get_node(self, task_id: str) -> Optional[CriticalPathNode]:
        for node in self.nodes:
            if node.task_id == task_id:
                return node
        return None

    def get_critical_nodes(self) -> list[CriticalPathNode]:
        """Get CriticalPathNode objects on the critical path."""
        return [n for n in self.nodes if n.is_critical]

    def get_nodes_by_slack(self, max_slack: float = None) -> list[CriticalPathNode]:
        """Get nodes sorted by slack (ascending)."""
        nodes = list(self.nodes)
        if max_slack is not None:
            nodes = [n for n in nodes if n.slack <= max_slack]
        return sorted(nodes, key=lambda n: n.slack)


@dataclass
class CriticalPathResult:
    """Results from critical path analysis."""

    critical_path: list[CriticalPathNode]
    near_critical_tasks: list[CriticalPathNode]
    float_distribution: dict[str, int]  # float_bucket -> count
    project_duration: float
    near_critical_threshold: float
    total_tasks: int

    def get_critical_path_length(self) -> int:
        """Number of tasks on critical path."""
        return len(self.critical_path)

    def get_risk_summary(self) -> str:
        """Get summary of schedule risk."""
        return (f"{len(self.critical_path)} critical tasks, "
                f"{len(self.near_critical_tasks)} near-critical "
                f"(<= {self.near_critical_threshold:g} days slack)")


@dataclass
class TaskImpactResult:
    """Results from single task what-if analysis."""

    task_id: str
    duration_delta: float
    original_project_duration: float
    new_project_duration: float
    slip: float
    affected_task_ids: list[str]
    original_critical_path: list[str]
    new_critical_path: list[str]
    critical_path_changed: bool

    def get_slip_summary(self) -> str:
        """Get human-readable slip summary."""
        if self.slip <= 0:
            return "No impact on project finish"
        return f"{self.slip:.1f} days slip"
