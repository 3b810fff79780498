"""Exceptions raised by the dependency store."""

from typing import Optional

from .models import DependencyType


class DependencyError(Exception):
    """Base class for dependency store errors."""


class CycleDetectedError(DependencyError):
    """Raised when a new blocking dependency would close a scheduling loop."""

    def __init__(
        self,
        from_task: str,
        to_task: str,
        dependency_type: DependencyType,
        path: Optional[list[str]] = None,
    ):
        self.from_task = from_task
        self.to_task = to_task
        self.dependency_type = dependency_type
        self.path = path or []
        super().__init__(
            f"Creating dependency {from_task} {dependency_type.label} {to_task} "
            f"would create a circular dependency chain"
        )


class DependencyNotFoundError(DependencyError):
    """Raised when a dependency id is required but unknown."""

    def __init__(self, dependency_id: str):
        self.dependency_id = dependency_id
        super().__init__(f"Dependency {dependency_id} not found")


class SelfReferenceError(DependencyError):
    """Raised when a dependency would point from a task to itself."""

    def __init__(self, task_id: str, dependency_type: DependencyType):
        self.task_id = task_id
        self.dependency_type = dependency_type
        super().__init__(
            f"Task {task_id} cannot have a {dependency_type.label} dependency on itself"
        )


class DuplicateDependencyError(DependencyError):
    """Raised when restoring a dependency whose id is already stored."""

    def __init__(self, dependency_id: str):
        self.dependency_id = dependency_id
        super().__init__(f"Dependency {dependency_id} already exists")
