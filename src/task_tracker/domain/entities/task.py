"""
Task Domain Entity (DTO).

Data Transfer Object for Task entity, providing a clean interface between
the application layer and database layer.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> list:
        """All status values, in lifecycle order."""
        return [status.value for status in cls]


DEFAULT_TASK_STATUS = TaskStatus.TODO


@dataclass
class TaskDTO:
    """
    Task Data Transfer Object.

    Attributes:
        id: Unique task identifier (UUID), assigned by storage
        owner_id: Identity of the user who created the task
        title: Task title (required)
        description: Optional free-form description
        status: Current status ('todo', 'in-progress', 'done')
        created_at: Task creation timestamp
        updated_at: Last modification timestamp
    """

    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    status: str = DEFAULT_TASK_STATUS.value
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary representation."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
