"""PermissionRepository protocol.

Owns permissions and the role-to-permission association, including the
canonical policy projection the synchronizer rebuilds the engine from.
"""

from typing import Protocol

from rbac_admin.core.result import Result
from rbac_admin.domain.entities import Permission
from rbac_admin.domain.errors import StorageError
from rbac_admin.domain.value_objects import GrantOutcome, PolicyRule, RevokeOutcome


class PermissionRepository(Protocol):
    """Permission repository protocol (port)."""

    async def find(self, resource: str, action: str) -> Result[Permission, StorageError]:
        ...

    async def list_all(self) -> Result[list[Permission], StorageError]: ...

    async def upsert(
        self, resource: str, action: str, description: str
    ) -> Result[Permission, StorageError]:
        """Insert the pair, or update only the description if it exists."""
        ...

    async def grant_pair(
        self, role_id: int, resource: str, action: str, description: str
    ) -> Result[GrantOutcome, StorageError]:
        """Find or create the permission and grant it in one transaction."""
        ...

    async def revoke(
        self, role_id: int, permission_id: int
    ) -> Result[RevokeOutcome, StorageError]:
        """Detach a permission from a role.

        On REMOVED, the permission itself is deleted when no other role
        refers to it. Both writes share one transaction.
        """
        ...

    async def replace_role_permissions(
        self, role_id: int, permission_ids: list[int]
    ) -> Result[None, StorageError]:
        """Rebind a role to exactly ``permission_ids``."""
        ...

    async def list_policies(self) -> Result[list[PolicyRule], StorageError]:
        """Project live grants to (role name, resource, action) tuples."""
        ...
