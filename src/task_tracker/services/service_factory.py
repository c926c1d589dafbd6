"""
Service Factory - Dependency injection for services.

Provides a centralized factory for creating service instances with
proper dependency injection.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Optional

from task_tracker.database.orm_manager import ORMManager, get_orm_manager
from task_tracker.database.repositories import TaskRepository, UserRepository

if TYPE_CHECKING:
    from task_tracker.services.task_service import TaskService

# Module-level singleton
_global_factory: Optional["ServiceFactory"] = None
_global_lock = threading.Lock()


def get_service_factory(orm_manager: Optional[ORMManager] = None) -> "ServiceFactory":
    """
    Get the singleton service factory instance.

    Args:
        orm_manager: Optional ORM manager instance. Uses singleton if not provided.

    Returns:
        ServiceFactory singleton instance.
    """
    global _global_factory

    with _global_lock:
        if _global_factory is None:
            _global_factory = ServiceFactory(orm_manager)
        return _global_factory


def reset_service_factory() -> None:
    """Reset the global service factory (for testing)."""
    global _global_factory

    with _global_lock:
        _global_factory = None


class ServiceFactory:
    """
    Factory for creating service instances with dependency injection.

    Creates and caches the repositories and the task service so they share
    one ORM manager. Services hold no per-request state.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize the service factory.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self._orm_manager = orm_manager or get_orm_manager()
        self._lock = threading.RLock()  # RLock allows reentrant locking

        self._task_repo: Optional[TaskRepository] = None
        self._user_repo: Optional[UserRepository] = None
        self._task_service: Optional["TaskService"] = None

    @property
    def orm_manager(self) -> ORMManager:
        """Get the ORM manager."""
        return self._orm_manager

    def get_task_repository(self) -> TaskRepository:
        """Get or create the task repository."""
        with self._lock:
            if self._task_repo is None:
                self._task_repo = TaskRepository(self._orm_manager)
            return self._task_repo

    def get_user_repository(self) -> UserRepository:
        """Get or create the user repository."""
        with self._lock:
            if self._user_repo is None:
                self._user_repo = UserRepository(self._orm_manager)
            return self._user_repo

    def get_task_service(self) -> "TaskService":
        """Get or create the task service."""
        from task_tracker.services.task_service import TaskService

        with self._lock:
            if self._task_service is None:
                self._task_service = TaskService(task_repo=self.get_task_repository())
            return self._task_service
