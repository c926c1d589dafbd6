"""
Storage constraint translation.

The only module that looks at engine-specific error codes. Repositories hand
every storage exception to ``translate_storage_error`` and get back a failed
DomainResult: known constraint violations become CONFLICT, everything else
becomes INTERNAL with the original exception attached.
"""

import logging
from enum import Enum
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from task_tracker.domain.entities.result_types import DomainError, DomainResult

logger = logging.getLogger(__name__)


class ConstraintViolation(Enum):
    """Storage constraint violations the domain knows how to report."""

    UNIQUE = "unique_violation"
    FOREIGN_KEY = "foreign_key_violation"
    DEPENDENCY = "dependency_violation"


# SQLite extended result codes (sqlite3.Error.sqlite_errorcode)
SQLITE_CONSTRAINT_FOREIGNKEY = 787
SQLITE_CONSTRAINT_PRIMARYKEY = 1555
SQLITE_CONSTRAINT_UNIQUE = 2067

SQLITE_ERROR_CODES = {
    SQLITE_CONSTRAINT_UNIQUE: ConstraintViolation.UNIQUE,
    SQLITE_CONSTRAINT_PRIMARYKEY: ConstraintViolation.UNIQUE,
    SQLITE_CONSTRAINT_FOREIGNKEY: ConstraintViolation.FOREIGN_KEY,
}

# SQLSTATE class 23 codes (PostgreSQL and other standard drivers)
SQLSTATE_UNIQUE_VIOLATION = "23505"
SQLSTATE_FOREIGN_KEY_VIOLATION = "23503"

SQLSTATE_CODES = {
    SQLSTATE_UNIQUE_VIOLATION: ConstraintViolation.UNIQUE,
    SQLSTATE_FOREIGN_KEY_VIOLATION: ConstraintViolation.FOREIGN_KEY,
}

# Fallback for sqlite3 builds that do not expose extended codes
SQLITE_MESSAGE_PREFIXES = (
    ("UNIQUE constraint failed", ConstraintViolation.UNIQUE),
    ("FOREIGN KEY constraint failed", ConstraintViolation.FOREIGN_KEY),
)

CONFLICT_MESSAGES = {
    ConstraintViolation.UNIQUE: "{resource} conflicts with an existing record",
    ConstraintViolation.FOREIGN_KEY: "{resource} references a record that does not exist",
    ConstraintViolation.DEPENDENCY: "{resource} is still referenced by other records",
}


def _engine_code(orig: Any) -> Any:
    """Pull the engine error code off a DBAPI exception, if it has one."""
    for attr in ("sqlite_errorcode", "pgcode", "sqlstate"):
        code = getattr(orig, attr, None)
        if code is not None:
            return code
    return None


def classify_constraint_violation(
    exc: BaseException, is_delete: bool = False
) -> Optional[ConstraintViolation]:
    """
    Classify a storage exception as a known constraint violation.

    A foreign-key failure raised while deleting means another row still
    references the deleted one, so it is reported as a dependency violation.

    Returns:
        The violation, or None if the exception is not a recognized one.
    """
    if not isinstance(exc, IntegrityError):
        return None

    orig = exc.orig
    code = _engine_code(orig)

    violation = SQLITE_ERROR_CODES.get(code) if isinstance(code, int) else None
    if violation is None and isinstance(code, str):
        violation = SQLSTATE_CODES.get(code)
    if violation is None:
        message = str(orig)
        for prefix, candidate in SQLITE_MESSAGE_PREFIXES:
            if message.startswith(prefix):
                violation = candidate
                break

    if violation is ConstraintViolation.FOREIGN_KEY and is_delete:
        return ConstraintViolation.DEPENDENCY
    return violation


def translate_storage_error(
    exc: BaseException,
    operation: str,
    is_delete: bool = False,
    resource: str = "Task",
) -> DomainResult[Any]:
    """
    Translate a storage exception into a failed domain result.

    Args:
        exc: The exception raised by the storage layer.
        operation: Operation name used in messages and details.
        is_delete: Whether the failing statement was a delete.
        resource: Entity name used in conflict messages.

    Returns:
        CONFLICT result for known constraint violations, INTERNAL otherwise.
    """
    violation = classify_constraint_violation(exc, is_delete=is_delete)
    if violation is None:
        logger.error("Unrecognized storage failure in %s: %s", operation, exc, exc_info=exc)
        return DomainError.internal(operation, exc)

    logger.info("Constraint violation in %s: %s", operation, violation.value)
    return DomainError.conflict(
        operation=operation,
        reason=violation.value,
        message=CONFLICT_MESSAGES[violation].format(resource=resource),
        suggestions=["Check related records and try again"],
    )
