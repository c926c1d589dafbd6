"""
User SQLAlchemy Model.

Minimal identity record that tasks point at through ``tasks.owner_id``.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from task_tracker.database.models.base import Base, generate_id, get_current_timestamp


class User(Base):
    """User model; account management lives in the identity subsystem."""

    __tablename__ = "users"

    id: str = Column(String(36), primary_key=True, default=generate_id)
    username: str = Column(String(150), nullable=False, unique=True, index=True)
    created_at: datetime = Column(DateTime, nullable=False, default=get_current_timestamp)

    # No cascade: removing a user with tasks is the identity subsystem's problem
    tasks = relationship("Task", back_populates="owner", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r})>"
