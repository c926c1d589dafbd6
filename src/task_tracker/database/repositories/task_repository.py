"""
Task Repository.

SQLAlchemy ORM-based repository for task operations.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select

from task_tracker.database.constraint_errors import translate_storage_error
from task_tracker.database.models.base import as_utc
from task_tracker.database.models.task import Task
from task_tracker.database.orm_manager import ORMManager, get_orm_manager
from task_tracker.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker.domain.entities.task import DEFAULT_TASK_STATUS, TaskDTO

# Columns the update path may write; id, owner_id and timestamps stay fixed
UPDATABLE_FIELDS = frozenset({"title", "description", "status"})


class TaskRepository:
    """
    Task repository using SQLAlchemy ORM.

    Provides CRUD operations for tasks with storage failures translated
    into DomainResult errors.
    """

    def __init__(self, orm_manager: Optional[ORMManager] = None):
        """
        Initialize repository with ORM manager.

        Args:
            orm_manager: ORM manager instance. Uses singleton if not provided.
        """
        self.orm_manager = orm_manager or get_orm_manager()

    def _to_dto(self, task: Task) -> TaskDTO:
        """Convert Task model to TaskDTO."""
        return TaskDTO(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=as_utc(task.created_at),
            updated_at=as_utc(task.updated_at),
        )

    def create(self, task_data: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """
        Create a new task.

        Args:
            task_data: Dictionary with owner_id, title and optional
                description/status.

        Returns:
            DomainResult with created task data.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = Task(
                    owner_id=task_data["owner_id"],
                    title=task_data["title"],
                    description=task_data.get("description"),
                    status=task_data.get("status") or DEFAULT_TASK_STATUS.value,
                )
                session.add(task)
                session.flush()

                return DomainSuccess.create(data=self._to_dto(task))

        except Exception as e:
            return translate_storage_error(e, "create_task")

    def get(self, task_id: str) -> DomainResult[TaskDTO]:
        """
        Get task by ID, whoever owns it.

        Args:
            task_id: Task UUID.

        Returns:
            DomainResult with task data or not found error.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.execute(select(Task).where(Task.id == task_id)).scalar_one_or_none()

                if not task:
                    return DomainError.not_found("Task", task_id)

                return DomainSuccess.create(data=self._to_dto(task))

        except Exception as e:
            return translate_storage_error(e, "get_task")

    def list_for_owner(
        self,
        owner_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> DomainResult[List[TaskDTO]]:
        """
        List tasks belonging to one owner.

        The owner filter is part of the query itself. Optional filters are
        ANDed together; empty values add no constraint.

        Args:
            owner_id: Owner whose tasks are listed.
            status: Exact status match.
            search: Case-insensitive substring of the title.

        Returns:
            DomainResult with list of task DTOs in storage order.
        """
        try:
            with self.orm_manager.get_session() as session:
                query = select(Task).where(Task.owner_id == owner_id)

                if status:
                    query = query.where(Task.status == status)
                if search:
                    query = query.where(Task.title.icontains(search, autoescape=True))

                tasks = session.execute(query).scalars().all()
                return DomainSuccess.create(data=[self._to_dto(t) for t in tasks])

        except Exception as e:
            return translate_storage_error(e, "list_tasks")

    def update(self, task_id: str, updates: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """
        Update a task.

        Only title, description and status are written; other keys are
        ignored. The row is looked up by id alone.

        Args:
            task_id: Task UUID.
            updates: Dictionary of fields to update.

        Returns:
            DomainResult with updated task data.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.execute(select(Task).where(Task.id == task_id)).scalar_one_or_none()

                if not task:
                    return DomainError.not_found("Task", task_id)

                for field, value in updates.items():
                    if field in UPDATABLE_FIELDS:
                        setattr(task, field, value)

                session.flush()
                return DomainSuccess.create(data=self._to_dto(task))

        except Exception as e:
            return translate_storage_error(e, "update_task")

    def delete(self, task_id: str) -> DomainResult[Dict[str, Any]]:
        """
        Delete a task.

        Args:
            task_id: Task UUID.

        Returns:
            DomainResult with deletion confirmation.
        """
        try:
            with self.orm_manager.get_session() as session:
                task = session.execute(select(Task).where(Task.id == task_id)).scalar_one_or_none()

                if not task:
                    return DomainError.not_found("Task", task_id)

                session.delete(task)
                session.flush()

                return DomainSuccess.create(
                    data={
                        "task_id": task_id,
                        "message": f"Task '{task_id}' deleted successfully",
                    }
                )

        except Exception as e:
            return translate_storage_error(e, "delete_task", is_delete=True)
