"""Policy commands (CQRS write operations on P and G).

Commands are immutable, keyword-only data containers; handlers return
Result types.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class GrantPolicy:
    """Allow ``role`` to call ``method`` on paths matching ``path``.

    Example:
        >>> command = GrantPolicy(role="user", path="/api/v1/test", method="GET")
    """

    role: str
    path: str
    method: str


@dataclass(frozen=True, kw_only=True)
class RevokePolicy:
    """Withdraw a grant previously made with GrantPolicy."""

    role: str
    path: str
    method: str


@dataclass(frozen=True, kw_only=True)
class AssignUserRoles:
    """Replace a user's role set with exactly ``roles`` (at least one)."""

    user_id: int
    roles: list[str]
