"""
Task Service - Business logic for task operations.

Every operation takes the caller's identity as an explicit ``owner_id`` and
checks it against the stored task before reading or mutating it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from task_tracker.domain.entities.result_types import (
    DomainError,
    DomainResult,
    DomainSuccess,
)
from task_tracker.domain.entities.task import DEFAULT_TASK_STATUS, TaskDTO, TaskStatus
from task_tracker.domain.interfaces import ITaskRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status")
IMMUTABLE_FIELDS = ("id", "owner_id", "created_at", "updated_at")

StatusInput = Union[TaskStatus, str, None]


class TaskService:
    """
    Service for task business logic.

    Single authorization and consistency checkpoint between the transports
    and the task repository.
    """

    def __init__(self, task_repo: ITaskRepository):
        """Initialize service with the task repository."""
        self.task_repo = task_repo

    # --- Helper Methods ---

    @staticmethod
    def _parse_status(status: StatusInput) -> DomainResult[TaskStatus]:
        """Coerce a status value into TaskStatus."""
        if isinstance(status, TaskStatus):
            return DomainSuccess.create(data=status)
        try:
            return DomainSuccess.create(data=TaskStatus(status))
        except ValueError:
            return DomainError.validation_error(
                f"Invalid status '{status}'",
                reason="invalid_status",
                details={"field": "status", "allowed": TaskStatus.values()},
                suggestions=[f"Use one of: {', '.join(TaskStatus.values())}"],
            )

    @staticmethod
    def _normalize_title(title: Optional[str]) -> Optional[str]:
        """Strip a title; returns None when nothing is left."""
        if not isinstance(title, str):
            return None
        title = title.strip()
        return title or None

    def _get_owned_task(self, owner_id: str, task_id: str, action: str) -> DomainResult[TaskDTO]:
        """
        Ownership gate shared by get, update and delete.

        Looks the task up by id alone so that a missing task (NOT_FOUND) and
        someone else's task (FORBIDDEN) stay distinguishable.
        """
        result = self.task_repo.get(task_id)
        if result.is_failure:
            return result

        task = result.data
        if task.owner_id != owner_id:
            logger.warning("User %s denied %s on task %s", owner_id, action, task_id)
            return DomainError.forbidden("Task", action, resource_id=task_id)

        return result

    # --- CRUD Operations ---

    def create_task(
        self,
        owner_id: str,
        title: str,
        description: Optional[str] = None,
        status: StatusInput = None,
    ) -> DomainResult[Dict[str, Any]]:
        """
        Create a new task owned by the caller.

        Args:
            owner_id: Caller identity; becomes the task's owner.
            title: Task title.
            description: Optional description.
            status: Initial status; defaults to todo. A task cannot start as done.

        Returns:
            DomainResult with created task data.
        """
        normalized_title = self._normalize_title(title)
        if normalized_title is None:
            return DomainError.validation_error(
                "Task title cannot be empty or whitespace",
                reason="empty_title",
                details={"field": "title"},
            )

        initial_status = DEFAULT_TASK_STATUS
        if status is not None:
            status_result = self._parse_status(status)
            if status_result.is_failure:
                return status_result
            initial_status = status_result.data

        if initial_status is TaskStatus.DONE:
            return DomainError.validation_error(
                "A task cannot be created already done",
                reason="done_on_create",
                details={"field": "status"},
                suggestions=["Create the task first, then update its status to done"],
            )

        result = self.task_repo.create(
            {
                "owner_id": owner_id,
                "title": normalized_title,
                "description": description,
                "status": initial_status.value,
            }
        )
        if result.is_failure:
            return result

        logger.info("User %s created task %s", owner_id, result.data.id)
        return DomainSuccess.create(data=result.data.to_dict())

    def list_tasks(
        self,
        owner_id: str,
        status: StatusInput = None,
        search: Optional[str] = None,
    ) -> DomainResult[List[Dict[str, Any]]]:
        """
        List the caller's tasks.

        Args:
            owner_id: Caller identity; only their tasks are returned.
            status: Optional exact status filter.
            search: Optional case-insensitive title substring.

        Returns:
            DomainResult with task dictionaries (order unspecified).
        """
        status_value = None
        if status:
            status_result = self._parse_status(status)
            if status_result.is_failure:
                return status_result
            status_value = status_result.data.value

        result = self.task_repo.list_for_owner(owner_id, status=status_value, search=search or None)
        if result.is_failure:
            return result

        return DomainSuccess.create(data=[t.to_dict() for t in result.data or []])

    def get_task(self, owner_id: str, task_id: str) -> DomainResult[Dict[str, Any]]:
        """Get one of the caller's tasks by ID."""
        result = self._get_owned_task(owner_id, task_id, "read")
        if result.is_failure:
            return result

        return DomainSuccess.create(data=result.data.to_dict())

    def update_task(
        self, owner_id: str, task_id: str, /, **updates: Any
    ) -> DomainResult[Dict[str, Any]]:
        """
        Apply a partial update to one of the caller's tasks.

        Accepts title, description and status; any status is allowed here,
        including moving into or out of done. ``owner_id`` and ``task_id``
        are positional-only, so the same names in ``updates`` are task fields
        and get rejected like any other immutable or unknown field.

        The ownership check and the write are two separate storage calls, so
        concurrent updates by the owner race and the last write wins.
        """
        gate_result = self._get_owned_task(owner_id, task_id, "update")
        if gate_result.is_failure:
            return gate_result

        immutable = sorted(field for field in updates if field in IMMUTABLE_FIELDS)
        if immutable:
            return DomainError.validation_error(
                f"Fields cannot be changed: {', '.join(immutable)}",
                reason="immutable_field",
                details={"fields": immutable},
            )

        unknown = sorted(field for field in updates if field not in UPDATABLE_FIELDS)
        if unknown:
            return DomainError.validation_error(
                f"Unknown task fields: {', '.join(unknown)}",
                reason="unknown_field",
                details={"fields": unknown, "allowed": list(UPDATABLE_FIELDS)},
            )

        changes: Dict[str, Any] = {}

        if "title" in updates:
            title = self._normalize_title(updates["title"])
            if title is None:
                return DomainError.validation_error(
                    "Task title cannot be empty or whitespace",
                    reason="empty_title",
                    details={"field": "title"},
                )
            changes["title"] = title

        if "description" in updates:
            changes["description"] = updates["description"]

        if "status" in updates:
            status_result = self._parse_status(updates["status"])
            if status_result.is_failure:
                return status_result
            changes["status"] = status_result.data.value

        if not changes:
            return DomainSuccess.create(data=gate_result.data.to_dict())

        result = self.task_repo.update(task_id, changes)
        if result.is_failure:
            return result

        logger.info("User %s updated task %s (%s)", owner_id, task_id, ", ".join(sorted(changes)))
        return DomainSuccess.create(data=result.data.to_dict())

    def delete_task(self, owner_id: str, task_id: str) -> DomainResult[Dict[str, Any]]:
        """Delete one of the caller's tasks."""
        gate_result = self._get_owned_task(owner_id, task_id, "delete")
        if gate_result.is_failure:
            return gate_result

        result = self.task_repo.delete(task_id)
        if result.is_failure:
            return result

        logger.info("User %s deleted task %s", owner_id, task_id)
        return result
