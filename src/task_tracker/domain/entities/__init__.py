"""Domain entities - Data Transfer Objects."""

from task_tracker.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainResult,
    DomainSuccess,
)
from task_tracker.domain.entities.task import DEFAULT_TASK_STATUS, TaskDTO, TaskStatus
from task_tracker.domain.entities.user import UserDTO

__all__ = [
    "DomainError",
    "DomainErrorType",
    "DomainResult",
    "DomainSuccess",
    "DEFAULT_TASK_STATUS",
    "TaskDTO",
    "TaskStatus",
    "UserDTO",
]
