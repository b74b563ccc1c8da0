"""Core errors package.

Usage:
    from rbac_admin.core.errors import AuthenticationError, DomainError
"""

from rbac_admin.core.errors.common_errors import AuthenticationError
from rbac_admin.core.errors.domain_error import DomainError

__all__ = [
    "AuthenticationError",
    "DomainError",
]
