"""
Domain Result Types - Pure Business Logic Results.

These types represent the outcome of domain operations without any
infrastructure or presentation concerns. Every failure carries exactly one
of the five error kinds below plus a short machine-usable reason.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar


class DomainErrorType(Enum):
    """Types of domain errors."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    INTERNAL = "internal"


T = TypeVar("T")


@dataclass
class DomainResult(Generic[T]):
    """
    Base result type for domain operations.

    Represents either success with data or failure with error information.
    Internal failures keep the exception that caused them in ``cause``.
    """

    success: bool
    data: Optional[T] = None
    error_type: Optional[DomainErrorType] = None
    error_message: Optional[str] = None
    error_details: Dict[str, Any] = field(default_factory=dict)
    suggestions: List[str] = field(default_factory=list)
    cause: Optional[BaseException] = field(default=None, repr=False, compare=False)

    @property
    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    @property
    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success

    @property
    def reason(self) -> Optional[str]:
        """Machine-usable failure reason, if any."""
        return self.error_details.get("reason")

    def get_data_or_raise(self) -> T:
        """Get data or raise if failed.

        Failures that wrap an exception re-raise it unchanged; other
        failures raise ValueError.
        """
        if self.is_failure:
            if self.cause is not None:
                raise self.cause
            raise ValueError(f"Cannot get data from failed result: {self.error_message}")
        return self.data  # type: ignore


@dataclass
class DomainSuccess(Generic[T]):
    """
    Factory for creating successful domain results.

    Usage:
        result = DomainSuccess.create(data=task)
    """

    @staticmethod
    def create(
        data: Optional[T] = None, suggestions: Optional[List[str]] = None
    ) -> DomainResult[T]:
        """Create a successful domain result."""
        return DomainResult(success=True, data=data, suggestions=suggestions or [])


@dataclass
class DomainError:
    """
    Factory for creating failed domain results.

    Usage:
        result = DomainError.validation_error("Invalid input", reason="empty_title")
    """

    @staticmethod
    def create(
        error_type: DomainErrorType,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ) -> DomainResult[Any]:
        """Create a failed domain result."""
        return DomainResult(
            success=False,
            error_type=error_type,
            error_message=message,
            error_details=details or {},
            suggestions=suggestions or [],
            cause=cause,
        )

    @staticmethod
    def validation_error(
        message: str,
        reason: str = "invalid_input",
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a validation error result."""
        return DomainError.create(
            DomainErrorType.VALIDATION_ERROR,
            message,
            {**(details or {}), "reason": reason},
            suggestions or ["Check input format and try again"],
        )

    @staticmethod
    def not_found(
        resource: str, resource_id: str, suggestions: Optional[List[str]] = None
    ) -> DomainResult[Any]:
        """Create a not found error result."""
        return DomainError.create(
            DomainErrorType.NOT_FOUND,
            f"{resource} '{resource_id}' not found",
            {
                "resource": resource,
                "id": resource_id,
                "reason": f"{resource.lower()}_not_found",
            },
            suggestions or [f"Verify the {resource.lower()} ID and try again"],
        )

    @staticmethod
    def forbidden(
        resource: str,
        action: str,
        resource_id: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a forbidden error result."""
        details: Dict[str, Any] = {"resource": resource, "action": action, "reason": "not_owner"}
        if resource_id is not None:
            details["id"] = resource_id
        return DomainError.create(
            DomainErrorType.FORBIDDEN,
            f"Access forbidden: Cannot {action} {resource.lower()} owned by another user",
            details,
            suggestions or ["Only the owner of a task can access it"],
        )

    @staticmethod
    def conflict(
        operation: str,
        reason: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> DomainResult[Any]:
        """Create a conflict (storage constraint violation) error result."""
        return DomainError.create(
            DomainErrorType.CONFLICT,
            message,
            {**(details or {}), "operation": operation, "reason": reason},
            suggestions,
        )

    @staticmethod
    def internal(
        operation: str,
        exc: BaseException,
        details: Optional[Dict[str, Any]] = None,
    ) -> DomainResult[Any]:
        """Create an internal error result that preserves the original exception."""
        return DomainError.create(
            DomainErrorType.INTERNAL,
            f"Operation '{operation}' failed: {exc}",
            {
                **(details or {}),
                "operation": operation,
                "exception_type": type(exc).__name__,
                "reason": "unrecognized_storage_error",
            },
            cause=exc,
        )
