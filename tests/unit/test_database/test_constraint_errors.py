"""Tests for storage constraint translation."""

import sqlite3

from sqlalchemy.exc import IntegrityError, OperationalError

from task_tracker.database.constraint_errors import (
    ConstraintViolation,
    classify_constraint_violation,
    translate_storage_error,
)
from task_tracker.domain.entities.result_types import DomainErrorType


class FakeDriverError(Exception):
    """DBAPI error exposing an SQLSTATE the way psycopg2 does."""

    def __init__(self, message: str, pgcode: str):
        super().__init__(message)
        self.pgcode = pgcode


class FakeSqliteError(Exception):
    """DBAPI error exposing an SQLite extended result code."""

    def __init__(self, message: str, sqlite_errorcode: int):
        super().__init__(message)
        self.sqlite_errorcode = sqlite_errorcode


def integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO tasks ...", {}, orig)


class TestClassifyConstraintViolation:
    """Tests for classify_constraint_violation."""

    def test_sqlite_unique_message(self):
        exc = integrity_error(sqlite3.IntegrityError("UNIQUE constraint failed: users.username"))
        assert classify_constraint_violation(exc) is ConstraintViolation.UNIQUE

    def test_sqlite_foreign_key_message(self):
        exc = integrity_error(sqlite3.IntegrityError("FOREIGN KEY constraint failed"))
        assert classify_constraint_violation(exc) is ConstraintViolation.FOREIGN_KEY

    def test_foreign_key_on_delete_is_dependency(self):
        exc = integrity_error(sqlite3.IntegrityError("FOREIGN KEY constraint failed"))
        assert classify_constraint_violation(exc, is_delete=True) is ConstraintViolation.DEPENDENCY

    def test_sqlite_extended_codes(self):
        unique = integrity_error(FakeSqliteError("constraint failed", 2067))
        primary_key = integrity_error(FakeSqliteError("constraint failed", 1555))
        foreign_key = integrity_error(FakeSqliteError("constraint failed", 787))

        assert classify_constraint_violation(unique) is ConstraintViolation.UNIQUE
        assert classify_constraint_violation(primary_key) is ConstraintViolation.UNIQUE
        assert classify_constraint_violation(foreign_key) is ConstraintViolation.FOREIGN_KEY

    def test_sqlstate_codes(self):
        unique = integrity_error(FakeDriverError("duplicate key value", "23505"))
        foreign_key = integrity_error(FakeDriverError("violates foreign key", "23503"))

        assert classify_constraint_violation(unique) is ConstraintViolation.UNIQUE
        assert classify_constraint_violation(foreign_key) is ConstraintViolation.FOREIGN_KEY
        assert (
            classify_constraint_violation(foreign_key, is_delete=True)
            is ConstraintViolation.DEPENDENCY
        )

    def test_other_integrity_errors_are_unrecognized(self):
        not_null = integrity_error(
            sqlite3.IntegrityError("NOT NULL constraint failed: tasks.title")
        )
        check = integrity_error(FakeDriverError("violates check constraint", "23514"))

        assert classify_constraint_violation(not_null) is None
        assert classify_constraint_violation(check) is None

    def test_non_integrity_errors_are_unrecognized(self):
        exc = OperationalError("SELECT 1", {}, sqlite3.OperationalError("database is locked"))
        assert classify_constraint_violation(exc) is None
        assert classify_constraint_violation(ValueError("nope")) is None


class TestTranslateStorageError:
    """Tests for translate_storage_error."""

    def test_known_violation_becomes_conflict(self):
        exc = integrity_error(sqlite3.IntegrityError("UNIQUE constraint failed: tasks.title"))

        result = translate_storage_error(exc, "update_task")

        assert result.is_failure
        assert result.error_type == DomainErrorType.CONFLICT
        assert result.reason == "unique_violation"
        assert result.error_details["operation"] == "update_task"
        assert result.error_message.startswith("Task")
        assert result.cause is None

    def test_resource_name_in_message(self):
        exc = integrity_error(sqlite3.IntegrityError("UNIQUE constraint failed: users.username"))

        result = translate_storage_error(exc, "create_user", resource="User")

        assert result.error_message == "User conflicts with an existing record"

    def test_unknown_failure_becomes_internal_with_cause(self):
        exc = OperationalError("SELECT 1", {}, sqlite3.OperationalError("disk I/O error"))

        result = translate_storage_error(exc, "get_task")

        assert result.error_type == DomainErrorType.INTERNAL
        assert result.reason == "unrecognized_storage_error"
        assert result.cause is exc
        assert result.error_details["exception_type"] == "OperationalError"
