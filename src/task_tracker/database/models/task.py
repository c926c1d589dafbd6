"""
Task SQLAlchemy Model.

Represents a single task owned by exactly one user.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from task_tracker.database.models.base import (
    TASK_STATUS_CONSTRAINT,
    Base,
    generate_id,
    get_current_timestamp,
)
from task_tracker.domain.entities.task import DEFAULT_TASK_STATUS


class Task(Base):
    """
    Task model representing a personal unit of work.

    ``owner_id`` references ``users.id`` without cascading, so the database
    rejects tasks for unknown owners.
    """

    __tablename__ = "tasks"

    id: str = Column(String(36), primary_key=True, default=generate_id)
    owner_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title: str = Column(String(255), nullable=False, index=True)
    description: Optional[str] = Column(Text, nullable=True)
    status: str = Column(String(20), nullable=False, default=DEFAULT_TASK_STATUS.value)
    created_at: datetime = Column(DateTime, nullable=False, default=get_current_timestamp)
    updated_at: datetime = Column(
        DateTime, nullable=False, default=get_current_timestamp, onupdate=get_current_timestamp
    )

    __table_args__ = (TASK_STATUS_CONSTRAINT,)

    owner = relationship("User", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task(id={self.id!r}, title={self.title!r}, status={self.status!r})>"
