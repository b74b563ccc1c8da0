"""Domain-level error codes (machine-readable).

Codes follow the ENTITY_ACTION_REASON naming convention and travel inside
DomainError instances returned through Result types.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes."""

    # Validation
    VALIDATION_FAILED = "validation_failed"
    INVALID_HTTP_METHOD = "invalid_http_method"

    # Resources
    RESOURCE_NOT_FOUND = "resource_not_found"
    USER_NOT_FOUND = "user_not_found"
    ROLE_NOT_FOUND = "role_not_found"
    PERMISSION_NOT_FOUND = "permission_not_found"

    # Conflicts
    RESOURCE_CONFLICT = "resource_conflict"
    USER_ALREADY_EXISTS = "user_already_exists"
    ROLE_ALREADY_EXISTS = "role_already_exists"
    POLICY_ALREADY_EXISTS = "policy_already_exists"

    # Authentication
    INVALID_CREDENTIALS = "invalid_credentials"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    USER_DISABLED = "user_disabled"

    # Authorization
    PERMISSION_DENIED = "permission_denied"

    # Storage
    STORAGE_FAILED = "storage_failed"
    STORAGE_UNAVAILABLE = "storage_unavailable"

    # Policy engine
    POLICY_ENGINE_FAILED = "policy_engine_failed"
    POLICY_MODEL_MISSING = "policy_model_missing"
