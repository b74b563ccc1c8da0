"""Domain entities.

Usage:
    from rbac_admin.domain.entities import Permission, Role, User
"""

from rbac_admin.domain.entities.permission import Permission
from rbac_admin.domain.entities.role import Role
from rbac_admin.domain.entities.user import User

__all__ = ["Permission", "Role", "User"]
