"""User Domain Entity (DTO)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class UserDTO:
    """
    User Data Transfer Object.

    Users are owned by the identity subsystem; the tracker only needs a
    stable id that tasks can reference.
    """

    id: str
    username: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert DTO to dictionary representation."""
        return {
            "id": self.id,
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
