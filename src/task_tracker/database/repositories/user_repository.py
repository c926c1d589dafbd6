"""
User Repository.

Creation and lookup of the identity records that tasks point at.
"""

from typing import Optional

from sqlalchemy import select

from task_tracker.database.constraint_errors import translate_storage_error
from task_tracker.database.models.base import as_utc
from task_tracker.database.models.user import User
from task_tracker.database.orm_manager import ORMManager, get_orm_manager
from task_tracker.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker.domain.entities.user import UserDTO


class UserRepository:
    """User repository using SQLAlchemy ORM."""

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        self.orm_manager = orm_manager or get_orm_manager()

    def _to_dto(self, user: User) -> UserDTO:
        return UserDTO(id=user.id, username=user.username, created_at=as_utc(user.created_at))

    def create(self, username: str) -> DomainResult[UserDTO]:
        """Create a new user; a duplicate username is a conflict."""
        username = username.strip() if username else ""
        if not username:
            return DomainError.validation_error(
                "Username cannot be empty or whitespace", reason="empty_username"
            )

        try:
            with self.orm_manager.get_session() as session:
                user = User(username=username)
                session.add(user)
                session.flush()
                return DomainSuccess.create(data=self._to_dto(user))

        except Exception as e:
            return translate_storage_error(e, "create_user", resource="User")

    def get(self, user_id: str) -> DomainResult[UserDTO]:
        """Get user by ID."""
        try:
            with self.orm_manager.get_session() as session:
                user = session.execute(select(User).where(User.id == user_id)).scalar_one_or_none()

                if not user:
                    return DomainError.not_found("User", user_id)

                return DomainSuccess.create(data=self._to_dto(user))

        except Exception as e:
            return translate_storage_error(e, "get_user", resource="User")
