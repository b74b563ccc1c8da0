"""UserRepository protocol for account persistence.

Port (interface) for hexagonal architecture. Every method reports failure
as ``Failure(StorageError)``; lookups of absent or soft-deleted users fail
with cause NOT_FOUND.
"""

from typing import Protocol

from rbac_admin.core.result import Result
from rbac_admin.domain.entities import User
from rbac_admin.domain.errors import StorageError
from rbac_admin.domain.value_objects import GroupingRule, Page


class UserRepository(Protocol):
    """User repository protocol (port)."""

    async def find_by_id(
        self, user_id: int, *, with_roles: bool = False
    ) -> Result[User, StorageError]:
        """Find a live user by id.

        Args:
            user_id: Surrogate identifier.
            with_roles: Populate ``User.roles`` with live role names.
        """
        ...

    async def find_by_username(
        self, username: str, *, with_roles: bool = False
    ) -> Result[User, StorageError]: ...

    async def list_page(
        self, *, page: int, page_size: int
    ) -> Result[Page[User], StorageError]: ...

    async def save(self, user: User) -> Result[User, StorageError]:
        """Insert a new user and return it with its generated id.

        Fails with UNIQUE_VIOLATION when username, email or phone collides
        with a live account.
        """
        ...

    async def update(self, user: User) -> Result[User, StorageError]: ...

    async def soft_delete(self, user_id: int) -> Result[None, StorageError]:
        """Mark the user deleted and drop its role memberships."""
        ...

    async def assign_roles(
        self, user_id: int, role_ids: list[int]
    ) -> Result[None, StorageError]:
        """Replace the user's role set with exactly ``role_ids``."""
        ...

    async def add_role(self, user_id: int, role_id: int) -> Result[bool, StorageError]:
        """Attach one role; returns False if the membership already existed."""
        ...

    async def list_groupings(self) -> Result[list[GroupingRule], StorageError]:
        """Project live memberships to (username, role name) pairs."""
        ...
