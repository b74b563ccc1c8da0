"""Queries (CQRS read side)."""

from rbac_admin.application.queries.rbac_queries import (
    GetRole,
    GetUser,
    ListPolicies,
    ListRoles,
    ListUsers,
)

__all__ = ["GetRole", "GetUser", "ListPolicies", "ListRoles", "ListUsers"]
