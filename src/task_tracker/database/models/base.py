"""
Database Models Base Classes and Utilities.

Shared base classes and helpers for all database models.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import DeclarativeBase

from task_tracker.domain.entities.task import TaskStatus


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""

    pass


def generate_id() -> str:
    """Generate a unique ID for records.

    Returns:
        str: UUID4 string suitable for use as primary key.
    """
    return str(uuid.uuid4())


def get_current_timestamp() -> datetime:
    """Get current timestamp in UTC.

    Returns:
        datetime: Current UTC timestamp for record creation/updates.
    """
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a timestamp read back from a column that drops the offset."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


TASK_STATUS_CONSTRAINT = CheckConstraint(
    "status IN ({})".format(", ".join(f"'{value}'" for value in TaskStatus.values())),
    name="check_task_status",
)
