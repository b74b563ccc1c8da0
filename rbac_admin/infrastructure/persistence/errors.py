"""Translation of SQLAlchemy failures into StorageError.

Repositories catch ``SQLAlchemyError`` at their boundary, roll back the
session and return ``Failure(storage_error_from(exc))``.
"""

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from rbac_admin.core.enums import ErrorCode
from rbac_admin.domain.errors import StorageError, StorageErrorCause

_UNIQUE_MARKERS = ("unique", "duplicate")


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique/primary-key collision."""
    message = str(exc.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


def classify(exc: SQLAlchemyError) -> StorageErrorCause:
    if isinstance(exc, IntegrityError):
        if is_unique_violation(exc):
            return StorageErrorCause.UNIQUE_VIOLATION
        return StorageErrorCause.UNKNOWN
    if isinstance(
        exc, (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)
    ):
        return StorageErrorCause.TRANSIENT_BACKEND
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return StorageErrorCause.TRANSIENT_BACKEND
    return StorageErrorCause.UNKNOWN


_CODES = {
    StorageErrorCause.UNIQUE_VIOLATION: ErrorCode.RESOURCE_CONFLICT,
    StorageErrorCause.TRANSIENT_BACKEND: ErrorCode.STORAGE_UNAVAILABLE,
    StorageErrorCause.UNKNOWN: ErrorCode.STORAGE_FAILED,
}


def storage_error_from(
    exc: SQLAlchemyError, *, resource_type: str | None = None
) -> StorageError:
    """Build a StorageError describing ``exc``."""
    cause = classify(exc)
    return StorageError(
        code=_CODES[cause],
        message=f"Database operation failed: {type(exc).__name__}",
        cause=cause,
        resource_type=resource_type,
        details={"error_type": type(exc).__name__},
    )


def not_found(resource_type: str, identifier: str) -> StorageError:
    return StorageError(
        code=ErrorCode.RESOURCE_NOT_FOUND,
        message=f"{resource_type} not found: {identifier}",
        cause=StorageErrorCause.NOT_FOUND,
        resource_type=resource_type,
        details={"identifier": identifier},
    )
