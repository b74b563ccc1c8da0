"""SQLAlchemy repositories (adapters for the domain repository ports)."""

from rbac_admin.infrastructure.persistence.repositories.permission_repository import (
    PermissionRepository,
)
from rbac_admin.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from rbac_admin.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["PermissionRepository", "RoleRepository", "UserRepository"]
