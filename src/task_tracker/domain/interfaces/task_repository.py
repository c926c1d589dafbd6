"""Task Repository Interface."""

from typing import Any, Dict, List, Optional, Protocol

from task_tracker.domain.entities.result_types import DomainResult
from task_tracker.domain.entities.task import TaskDTO


class ITaskRepository(Protocol):
    """Protocol for task repository operations."""

    def create(self, task_data: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """Create a new task."""
        ...

    def get(self, task_id: str) -> DomainResult[TaskDTO]:
        """Get task by ID, regardless of owner."""
        ...

    def list_for_owner(
        self,
        owner_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> DomainResult[List[TaskDTO]]:
        """List an owner's tasks with optional status and title filters."""
        ...

    def update(self, task_id: str, updates: Dict[str, Any]) -> DomainResult[TaskDTO]:
        """Update a task."""
        ...

    def delete(self, task_id: str) -> DomainResult[Dict[str, Any]]:
        """Delete a task."""
        ...
