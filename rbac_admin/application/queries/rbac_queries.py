"""RBAC queries (CQRS read operations). Queries never change state."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ListPolicies:
    """All (role, path, method) tuples currently held by the engine."""


@dataclass(frozen=True, kw_only=True)
class ListRoles:
    pass


@dataclass(frozen=True, kw_only=True)
class GetRole:
    role_id: int


@dataclass(frozen=True, kw_only=True)
class GetUser:
    user_id: int


@dataclass(frozen=True, kw_only=True)
class ListUsers:
    """One page of live users.

    Attributes:
        page: 1-based page number.
        page_size: Rows per page (1-100).
    """

    page: int = 1
    page_size: int = 10
