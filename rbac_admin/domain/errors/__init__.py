"""Domain errors.

Usage:
    from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause
"""

from rbac_admin.domain.errors.policy_engine_error import PolicyEngineError
from rbac_admin.domain.errors.storage_error import StorageError, StorageErrorCause

__all__ = ["PolicyEngineError", "StorageError", "StorageErrorCause"]
