"""Common error classes shared by every layer.

Usage:
    return Failure(error=AuthenticationError(
        code=ErrorCode.TOKEN_EXPIRED,
        message="Token has expired",
    ))
"""

from dataclasses import dataclass

from rbac_admin.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credentials, invalid token)."""

    pass
