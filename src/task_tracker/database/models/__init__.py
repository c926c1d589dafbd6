"""Database models."""

from task_tracker.database.models.base import Base, as_utc, generate_id, get_current_timestamp
from task_tracker.database.models.task import Task
from task_tracker.database.models.user import User

__all__ = [
    "Base",
    "as_utc",
    "generate_id",
    "get_current_timestamp",
    "Task",
    "User",
]
