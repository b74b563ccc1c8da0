"""PolicyEngine protocol.

The engine holds two in-memory relations: P (role, resource, action) and
G (username, role). Enforcement is synchronous and side-effect free;
mutations are serialized by the implementation (single writer, many
readers). Only ``save`` and ``rebuild`` suspend under the write lock.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from rbac_admin.core.result import Result
from rbac_admin.domain.errors import PolicyEngineError, StorageError
from rbac_admin.domain.value_objects import GroupingRule, PolicyRule


class PolicyEngine(Protocol):
    """Policy decision engine port."""

    def enforce(self, sub: str, obj: str, act: str) -> Result[bool, PolicyEngineError]:
        """Decide whether ``sub`` may perform ``act`` on ``obj``.

        ``sub`` may be a username (resolved through G) or a role name.
        """
        ...

    async def add_policy(self, rule: PolicyRule) -> Result[bool, PolicyEngineError]:
        """Add to P; Success(False) if the tuple already existed."""
        ...

    async def remove_policy(self, rule: PolicyRule) -> Result[bool, PolicyEngineError]:
        """Remove from P; Success(False) if the tuple was absent."""
        ...

    async def add_grouping(self, rule: GroupingRule) -> Result[bool, PolicyEngineError]:
        ...

    async def remove_grouping(
        self, rule: GroupingRule
    ) -> Result[bool, PolicyEngineError]: ...

    async def clear_policy(self) -> None: ...

    async def save(self) -> Result[None, PolicyEngineError]:
        """Checkpoint the current P and G to durable storage."""
        ...

    async def load(
        self, groupings: list[GroupingRule], policies: list[PolicyRule]
    ) -> Result[None, PolicyEngineError]:
        """Replace P and G with the given projection as a single write."""
        ...

    async def rebuild(
        self,
        loader: Callable[
            [], Awaitable[Result[tuple[list[GroupingRule], list[PolicyRule]], StorageError]]
        ],
    ) -> Result[None, PolicyEngineError | StorageError]:
        """Replace P and G with what ``loader`` reads, under one write lock."""
        ...

    def get_policies(self) -> list[PolicyRule]: ...

    def get_groupings(self) -> list[GroupingRule]: ...
