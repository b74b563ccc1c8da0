"""Policy synchronizer: keeps the policy engine equal to the identity store.

Invariants maintained after every completed operation:
    P == {(role.name, perm.resource, perm.action)} over live grants
    G == {(user.username, role.name)} over live memberships

Modes:
    Full rebuild (``sync_all``): read both projections and replace P and G
    under the engine write lock, then checkpoint with ``save``. Incremental
    engine writes that arrive during the read wait for the replace.

    Incremental (``grant``, ``revoke``, ``attach_role``, ``remove_user``):
    identity store first, engine second, ``save`` third. The store is
    written first so that a crash before ``save`` is repaired by the next
    rebuild; an engine-only change would be lost on restart.

Failure model:
    - Store mutation fails: return its error, engine untouched.
    - Engine mutation fails: log a warning and run ``sync_all``; the
      original error is returned only if the rebuild fails as well.
    - ``save`` fails: log and return the error; the next startup rebuild
      restores convergence.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.errors import PolicyEngineError, StorageError
from rbac_admin.domain.protocols import (
    LoggerProtocol,
    PermissionRepository,
    PolicyEngine,
    UserRepository,
)
from rbac_admin.domain.value_objects import (
    GrantOutcome,
    GroupingRule,
    PolicyRule,
    RevokeOutcome,
)

type SyncError = StorageError | PolicyEngineError


class PolicySynchronizer:
    """Coordinates identity store writes with policy engine updates.

    Repositories are bound to the caller's session; the engine is the
    process-wide instance created at bootstrap.
    """

    def __init__(
        self,
        *,
        engine: PolicyEngine,
        user_repository: UserRepository,
        permission_repository: PermissionRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._engine = engine
        self._users = user_repository
        self._permissions = permission_repository
        self._logger = logger

    async def load_engine(self) -> Result[None, SyncError]:
        """Replace P and G with the current store projection (no checkpoint)."""
        return await self._engine.rebuild(self._read_projection)

    async def _read_projection(
        self,
    ) -> Result[tuple[list[GroupingRule], list[PolicyRule]], StorageError]:
        groupings = await self._users.list_groupings()
        if isinstance(groupings, Failure):
            return groupings
        policies = await self._permissions.list_policies()
        if isinstance(policies, Failure):
            return policies
        return Success(value=(groupings.value, policies.value))

    async def sync_all(self) -> Result[None, SyncError]:
        """Rebuild the engine from the store and checkpoint it.

        Running it twice in a row yields the same engine state.
        """
        loaded = await self.load_engine()
        if isinstance(loaded, Failure):
            self._logger.error(
                "policy_sync_failed",
                stage="load",
                error_code=loaded.error.code.value,
                error_message=loaded.error.message,
            )
            return loaded

        saved = await self._engine.save()
        if isinstance(saved, Failure):
            self._logger.error(
                "policy_sync_failed",
                stage="save",
                error_code=saved.error.code.value,
                error_message=saved.error.message,
            )
            return saved

        self._logger.info(
            "policy_sync_completed",
            policy_count=len(self._engine.get_policies()),
            grouping_count=len(self._engine.get_groupings()),
        )
        return Success(value=None)

    async def grant(
        self, role: Role, resource: str, action: str, description: str = ""
    ) -> Result[GrantOutcome, SyncError]:
        """Grant (resource, action) to ``role``.

        Idempotent: a repeated grant returns ALREADY_EXISTS and leaves both
        sides unchanged (the engine add still runs, so a grant interrupted
        before its engine step converges when retried).
        """
        stored = await self._permissions.grant_pair(
            role.id, resource, action, description or f"{action} {resource}"
        )
        if isinstance(stored, Failure):
            return stored

        rule = PolicyRule(role.name, resource, action)
        applied = await self._apply(
            "grant", lambda: self._engine.add_policy(rule), **_rule_context(rule)
        )
        if isinstance(applied, Failure):
            return applied

        self._logger.info(
            "policy_granted", outcome=stored.value.value, **_rule_context(rule)
        )
        return stored

    async def revoke(
        self, role: Role, permission_id: int, resource: str, action: str
    ) -> Result[RevokeOutcome, SyncError]:
        """Revoke a grant; the permission row goes if no other role holds it."""
        stored = await self._permissions.revoke(role.id, permission_id)
        if isinstance(stored, Failure):
            return stored

        rule = PolicyRule(role.name, resource, action)
        applied = await self._apply(
            "revoke", lambda: self._engine.remove_policy(rule), **_rule_context(rule)
        )
        if isinstance(applied, Failure):
            return applied

        self._logger.info(
            "policy_revoked", outcome=stored.value.value, **_rule_context(rule)
        )
        return stored

    async def attach_role(self, user: User, role: Role) -> Result[bool, SyncError]:
        """Add one membership without touching the user's other roles."""
        stored = await self._users.add_role(user.id, role.id)
        if isinstance(stored, Failure):
            return stored

        grouping = GroupingRule(user.username, role.name)
        applied = await self._apply(
            "attach_role",
            lambda: self._engine.add_grouping(grouping),
            username=user.username,
            role=role.name,
        )
        if isinstance(applied, Failure):
            return applied
        return stored

    async def remove_user(self, user: User) -> Result[None, SyncError]:
        """Soft-delete a user and drop its groupings from the engine."""
        stored = await self._users.soft_delete(user.id)
        if isinstance(stored, Failure):
            return stored

        for role_name in user.roles:
            grouping = GroupingRule(user.username, role_name)
            removed = await self._engine.remove_grouping(grouping)
            if isinstance(removed, Failure):
                return await self._recover("remove_user", removed, username=user.username)

        return await self._save("remove_user", username=user.username)

    async def assign_roles(self, user: User, roles: list[Role]) -> Result[None, SyncError]:
        """Replace the user's role set, then rebuild the engine."""
        stored = await self._users.assign_roles(
            user.id, [role.id for role in roles if role.id is not None]
        )
        if isinstance(stored, Failure):
            return stored
        self._logger.info(
            "user_roles_assigned",
            user_id=user.id,
            username=user.username,
            roles=[role.name for role in roles],
        )
        return await self.sync_all()

    async def _apply(
        self,
        operation: str,
        mutation: Callable[[], Awaitable[Result[bool, PolicyEngineError]]],
        **context: Any,
    ) -> Result[None, SyncError]:
        mutated = await mutation()
        if isinstance(mutated, Failure):
            return await self._recover(operation, mutated, **context)
        return await self._save(operation, **context)

    async def _save(self, operation: str, **context: Any) -> Result[None, SyncError]:
        saved = await self._engine.save()
        if isinstance(saved, Failure):
            self._logger.error(
                "policy_checkpoint_failed",
                operation=operation,
                error_message=saved.error.message,
                **context,
            )
            return saved
        return Success(value=None)

    async def _recover(
        self, operation: str, failure: Failure[PolicyEngineError], **context: Any
    ) -> Result[None, SyncError]:
        self._logger.warning(
            "policy_engine_diverged",
            operation=operation,
            error_message=failure.error.message,
            **context,
        )
        resynced = await self.sync_all()
        if isinstance(resynced, Failure):
            self._logger.warning(
                "policy_resync_required",
                operation=operation,
                error_message=failure.error.message,
                resync_error=resynced.error.message,
                **context,
            )
            return failure
        return Success(value=None)


def _rule_context(rule: PolicyRule) -> dict[str, str]:
    return {"role": rule.role, "resource": rule.resource, "action": rule.action}
