"""Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from rbac_admin.infrastructure.persistence.models.casbin_rule import CasbinRule
from rbac_admin.infrastructure.persistence.models.permission import Permission
from rbac_admin.infrastructure.persistence.models.role import Role
from rbac_admin.infrastructure.persistence.models.role_permission import (
    RolePermission,
)
from rbac_admin.infrastructure.persistence.models.user import User
from rbac_admin.infrastructure.persistence.models.user_role import UserRole

__all__ = [
    "CasbinRule",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "UserRole",
]
