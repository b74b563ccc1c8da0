"""Application layer error types.

ApplicationError wraps domain errors with the context the presentation
layer needs to choose a response.
"""

from dataclasses import dataclass
from enum import Enum

from rbac_admin.core.errors.domain_error import DomainError
from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Role not found",
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE_FAILURE = "storage_failure"
    ENGINE_FAILURE = "engine_failure"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code.
        message: Human-readable error message.
        domain_error: Original domain error, if any.
        details: Additional context as key-value pairs.
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None


_STORAGE_CODES = {
    StorageErrorCause.NOT_FOUND: ApplicationErrorCode.NOT_FOUND,
    StorageErrorCause.UNIQUE_VIOLATION: ApplicationErrorCode.CONFLICT,
    StorageErrorCause.TRANSIENT_BACKEND: ApplicationErrorCode.STORAGE_FAILURE,
    StorageErrorCause.UNKNOWN: ApplicationErrorCode.STORAGE_FAILURE,
}


def from_domain_error(
    error: DomainError, message: str | None = None
) -> ApplicationError:
    """Wrap a storage or engine error.

    Storage causes map onto NOT_FOUND / CONFLICT / STORAGE_FAILURE; engine
    errors map onto ENGINE_FAILURE.
    """
    if isinstance(error, StorageError):
        code = _STORAGE_CODES[error.cause]
    elif isinstance(error, PolicyEngineError):
        code = ApplicationErrorCode.ENGINE_FAILURE
    else:
        code = ApplicationErrorCode.COMMAND_VALIDATION_FAILED
    return ApplicationError(
        code=code,
        message=message or error.message,
        domain_error=error,
    )
