"""RoleRepository protocol for role persistence."""

from typing import Protocol

from rbac_admin.core.result import Result
from rbac_admin.domain.entities import Role
from rbac_admin.domain.errors import StorageError


class RoleRepository(Protocol):
    """Role repository protocol (port).

    All reads see live roles only. ``delete`` cascades to memberships and
    grants, garbage-collects permissions left without grants, then
    soft-deletes the role.
    """

    async def find_by_id(self, role_id: int) -> Result[Role, StorageError]: ...

    async def find_by_name(self, name: str) -> Result[Role, StorageError]: ...

    async def find_by_names(self, names: list[str]) -> Result[list[Role], StorageError]:
        """Resolve names to roles.

        Order is unspecified and unknown names are skipped, so the result may
        be shorter than the input.
        """
        ...

    async def list_all(self) -> Result[list[Role], StorageError]: ...

    async def save(self, role: Role) -> Result[Role, StorageError]: ...

    async def update(self, role: Role) -> Result[Role, StorageError]: ...

    async def upsert(self, name: str, description: str) -> Result[Role, StorageError]:
        """Create the role or refresh the description of the live one."""
        ...

    async def delete(self, role_id: int) -> Result[None, StorageError]: ...
