"""Service layer - Business logic orchestration."""

from task_tracker.services.service_factory import ServiceFactory, get_service_factory
from task_tracker.services.task_service import TaskService

__all__ = [
    "TaskService",
    "ServiceFactory",
    "get_service_factory",
]
