"""Database repositories."""

from task_tracker.database.repositories.task_repository import TaskRepository
from task_tracker.database.repositories.user_repository import UserRepository

__all__ = [
    "TaskRepository",
    "UserRepository",
]
