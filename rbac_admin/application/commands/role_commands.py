"""Role commands (CQRS write operations)."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class CreateRole:
    name: str
    description: str = ""


@dataclass(frozen=True, kw_only=True)
class UpdateRole:
    """Rename a role and/or change its description.

    A rename rewrites every policy and grouping tuple that names the role.
    """

    role_id: int
    name: str
    description: str = ""


@dataclass(frozen=True, kw_only=True)
class DeleteRole:
    """Delete a role, its memberships and its grants."""

    role_id: int
