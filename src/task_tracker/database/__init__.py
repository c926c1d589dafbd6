"""Database layer - SQLAlchemy ORM models and repositories."""

from task_tracker.database.models.base import Base
from task_tracker.database.orm_manager import ORMManager, get_orm_manager

__all__ = [
    "ORMManager",
    "get_orm_manager",
    "Base",
]
