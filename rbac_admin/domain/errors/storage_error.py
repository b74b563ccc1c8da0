"""Identity store failures.

Every repository primitive reports failure as a StorageError carrying a
cause classification. Nothing inside the service retries a StorageError;
it is surfaced to the caller.

Usage:
    return Failure(error=StorageError(
        code=ErrorCode.STORAGE_UNAVAILABLE,
        message="Database connection lost",
        cause=StorageErrorCause.TRANSIENT_BACKEND,
    ))
"""

from dataclasses import dataclass
from enum import Enum

from rbac_admin.core.errors import DomainError


class StorageErrorCause(Enum):
    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    TRANSIENT_BACKEND = "transient_backend"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageError(DomainError):
    """Identity store failure.

    Attributes:
        cause: Classification used by handlers to pick a response.
        resource_type: Entity involved, when known.
    """

    cause: StorageErrorCause
    resource_type: str | None = None

    @property
    def is_not_found(self) -> bool:
        return self.cause is StorageErrorCause.NOT_FOUND

    @property
    def is_unique_violation(self) -> bool:
        return self.cause is StorageErrorCause.UNIQUE_VIOLATION
