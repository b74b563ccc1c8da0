"""Commands (CQRS write side)."""

from rbac_admin.application.commands.policy_commands import (
    AssignUserRoles,
    GrantPolicy,
    RevokePolicy,
)
from rbac_admin.application.commands.role_commands import (
    CreateRole,
    DeleteRole,
    UpdateRole,
)
from rbac_admin.application.commands.user_commands import (
    AuthenticateUser,
    ChangePassword,
    DeleteUser,
    RegisterUser,
    UpdateUser,
)

__all__ = [
    "AssignUserRoles",
    "AuthenticateUser",
    "ChangePassword",
    "CreateRole",
    "DeleteRole",
    "DeleteUser",
    "GrantPolicy",
    "RegisterUser",
    "RevokePolicy",
    "UpdateRole",
    "UpdateUser",
]
