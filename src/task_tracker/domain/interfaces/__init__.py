"""Domain interfaces - Protocol-based repository contracts."""

from task_tracker.domain.interfaces.task_repository import ITaskRepository

__all__ = [
    "ITaskRepository",
]
