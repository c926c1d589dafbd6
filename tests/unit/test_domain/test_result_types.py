"""Tests for domain result types."""

import pytest

from task_tracker.domain.entities.result_types import (
    DomainError,
    DomainErrorType,
    DomainSuccess,
)


class TestDomainResult:
    """Tests for DomainResult."""

    def test_success_result(self):
        """Test creating a success result."""
        result = DomainSuccess.create(data={"id": "123"})

        assert result.success is True
        assert result.is_success is True
        assert result.is_failure is False
        assert result.data == {"id": "123"}
        assert result.error_message is None
        assert result.reason is None

    def test_error_kinds_are_fixed(self):
        """The taxonomy has exactly five kinds."""
        assert {kind.value for kind in DomainErrorType} == {
            "validation_error",
            "not_found",
            "forbidden",
            "conflict",
            "internal",
        }

    def test_validation_error(self):
        """Test creating a validation error."""
        result = DomainError.validation_error("Invalid input", reason="empty_title")

        assert result.is_failure is True
        assert result.error_message == "Invalid input"
        assert result.error_type == DomainErrorType.VALIDATION_ERROR
        assert result.reason == "empty_title"

    def test_not_found_error(self):
        """Test creating a not found error."""
        result = DomainError.not_found("Task", "abc123")

        assert result.is_failure is True
        assert result.error_type == DomainErrorType.NOT_FOUND
        assert "Task" in result.error_message
        assert "abc123" in result.error_message
        assert result.reason == "task_not_found"

    def test_forbidden_error(self):
        """Test creating a forbidden error."""
        result = DomainError.forbidden("Task", "update", resource_id="abc123")

        assert result.error_type == DomainErrorType.FORBIDDEN
        assert result.reason == "not_owner"
        assert result.error_details["action"] == "update"
        assert result.error_details["id"] == "abc123"

    def test_conflict_error(self):
        """Test creating a conflict error."""
        result = DomainError.conflict(
            operation="delete_task",
            reason="dependency_violation",
            message="Task is still referenced by other records",
        )

        assert result.error_type == DomainErrorType.CONFLICT
        assert result.reason == "dependency_violation"
        assert result.error_details["operation"] == "delete_task"

    def test_internal_error_keeps_cause(self):
        """Internal errors carry the original exception."""
        exc = RuntimeError("disk on fire")
        result = DomainError.internal("update_task", exc)

        assert result.error_type == DomainErrorType.INTERNAL
        assert result.cause is exc
        assert result.error_details["exception_type"] == "RuntimeError"
        assert "disk on fire" in result.error_message

    def test_get_data_or_raise_success(self):
        """Test get_data_or_raise with success."""
        result = DomainSuccess.create(data={"value": 42})
        assert result.get_data_or_raise() == {"value": 42}

    def test_get_data_or_raise_failure(self):
        """Test get_data_or_raise with failure."""
        result = DomainError.validation_error("Error")
        with pytest.raises(ValueError):
            result.get_data_or_raise()

    def test_get_data_or_raise_reraises_cause_unchanged(self):
        """Unrecognized failures propagate as the original exception."""
        exc = KeyError("boom")
        result = DomainError.internal("get_task", exc)

        with pytest.raises(KeyError) as info:
            result.get_data_or_raise()
        assert info.value is exc
