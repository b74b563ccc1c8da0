"""Core enums package.

Usage:
    from rbac_admin.core.enums import ErrorCode, Environment
"""

from rbac_admin.core.enums.environment import Environment
from rbac_admin.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
