"""Casbin-backed policy engine.

Wraps ``casbin.AsyncEnforcer`` to hold P (role, resource, action) and
G (username, role) in memory.

Concurrency:
    Writers (add/remove, clear, load) and ``save`` run under one
    ``asyncio.Lock``. In-memory mutations never suspend, so on the event
    loop thread ``enforce`` (synchronous) always observes a complete state:
    a reader cannot run between two steps of a write. ``rebuild`` keeps the
    lock across its store read, so a concurrent add or remove is applied
    after the replace rather than overwritten by it.

Durability:
    Auto-save is disabled. ``save`` writes the whole of P and G to the
    ``casbin_rule`` checkpoint table through the SQLAlchemy adapter.
    ``load`` replaces P and G with a projection supplied by the caller
    (the synchronizer reads it from the role/permission tables).
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import casbin
from casbin_async_sqlalchemy_adapter import Adapter as CasbinSQLAdapter
from sqlalchemy.ext.asyncio import AsyncEngine

from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.errors import PolicyEngineError, StorageError
from rbac_admin.domain.protocols import LoggerProtocol
from rbac_admin.domain.value_objects import GroupingRule, PolicyRule
from rbac_admin.infrastructure.authorization.key_match import key_match_func
from rbac_admin.infrastructure.persistence.models import CasbinRule


type Projection = tuple[list[GroupingRule], list[PolicyRule]]


class PolicyModelNotFoundError(FileNotFoundError):
    """The policy model file is missing; the service cannot start."""


def build_enforcer(model_path: Path, engine: AsyncEngine) -> casbin.AsyncEnforcer:
    """Create an enforcer for ``model_path`` persisting to ``casbin_rule``.

    Raises:
        PolicyModelNotFoundError: If the model file does not exist.
    """
    if not model_path.is_file():
        raise PolicyModelNotFoundError(f"Policy model file not found: {model_path}")
    adapter = CasbinSQLAdapter(engine, db_class=CasbinRule)
    return casbin.AsyncEnforcer(str(model_path), adapter)


class CasbinPolicyEngine:
    """Policy engine over a casbin enforcer.

    Attributes:
        enforcer: Underlying casbin enforcer (exposed for diagnostics).

    Example:
        >>> engine = CasbinPolicyEngine(build_enforcer(path, db.engine), logger)
        >>> await engine.add_policy(PolicyRule("admin", "/api/v1/test", "GET"))
        >>> engine.enforce("admin", "/api/v1/test", "GET")
        Success(value=True)
    """

    def __init__(self, enforcer: casbin.AsyncEnforcer, logger: LoggerProtocol) -> None:
        self.enforcer = enforcer
        self.enforcer.enable_auto_save(False)
        self.enforcer.add_function("keyMatch", key_match_func)
        self._write_lock = asyncio.Lock()
        self._logger = logger

    def enforce(self, sub: str, obj: str, act: str) -> Result[bool, PolicyEngineError]:
        try:
            allowed = self.enforcer.enforce(sub, obj, act)
        except Exception as e:
            self._logger.error(
                "policy_enforce_error", error=e, subject=sub, resource=obj, action=act
            )
            return Failure(error=self._error("enforce", e))
        return Success(value=bool(allowed))

    async def add_policy(self, rule: PolicyRule) -> Result[bool, PolicyEngineError]:
        async with self._write_lock:
            try:
                added = await self.enforcer.add_policy(*rule.as_list())
            except Exception as e:
                return Failure(error=self._error("add_policy", e))
        return Success(value=bool(added))

    async def remove_policy(self, rule: PolicyRule) -> Result[bool, PolicyEngineError]:
        async with self._write_lock:
            try:
                removed = await self.enforcer.remove_policy(*rule.as_list())
            except Exception as e:
                return Failure(error=self._error("remove_policy", e))
        return Success(value=bool(removed))

    async def add_grouping(self, rule: GroupingRule) -> Result[bool, PolicyEngineError]:
        async with self._write_lock:
            try:
                added = await self.enforcer.add_grouping_policy(*rule.as_list())
            except Exception as e:
                return Failure(error=self._error("add_grouping", e))
        return Success(value=bool(added))

    async def remove_grouping(
        self, rule: GroupingRule
    ) -> Result[bool, PolicyEngineError]:
        async with self._write_lock:
            try:
                removed = await self.enforcer.remove_grouping_policy(*rule.as_list())
            except Exception as e:
                return Failure(error=self._error("remove_grouping", e))
        return Success(value=bool(removed))

    async def clear_policy(self) -> None:
        async with self._write_lock:
            self._replace([], [])

    async def load(
        self, groupings: list[GroupingRule], policies: list[PolicyRule]
    ) -> Result[None, PolicyEngineError]:
        """Replace P and G with the given relations as a single write."""
        async with self._write_lock:
            return self._load_locked("load", groupings, policies)

    async def rebuild(
        self, loader: Callable[[], Awaitable[Result[Projection, StorageError]]]
    ) -> Result[None, PolicyEngineError | StorageError]:
        """Read a projection with ``loader`` and replace P and G with it.

        The write lock is held from before the read until the replace, so
        an incremental mutation committed to the store during the read
        waits and is applied on top of the rebuilt state.
        """
        async with self._write_lock:
            projection = await loader()
            if isinstance(projection, Failure):
                return projection
            groupings, policies = projection.value
            return self._load_locked("rebuild", groupings, policies)

    async def save(self) -> Result[None, PolicyEngineError]:
        """Checkpoint P and G to ``casbin_rule`` (replaces the table)."""
        async with self._write_lock:
            try:
                await self.enforcer.save_policy()
            except Exception as e:
                self._logger.error("policy_save_error", error=e)
                return Failure(error=self._error("save", e))
        return Success(value=None)

    def get_policies(self) -> list[PolicyRule]:
        return [PolicyRule(*rule[:3]) for rule in self.enforcer.get_policy()]

    def get_groupings(self) -> list[GroupingRule]:
        return [GroupingRule(*rule[:2]) for rule in self.enforcer.get_grouping_policy()]

    def _load_locked(
        self,
        operation: str,
        groupings: list[GroupingRule],
        policies: list[PolicyRule],
    ) -> Result[None, PolicyEngineError]:
        try:
            self._replace(groupings, policies)
        except Exception as e:
            return Failure(error=self._error(operation, e))
        self._logger.debug(
            "policy_engine_loaded", policies=len(policies), groupings=len(groupings)
        )
        return Success(value=None)

    def _replace(
        self, groupings: list[GroupingRule], policies: list[PolicyRule]
    ) -> None:
        model = self.enforcer.get_model()
        model.clear_policy()
        for grouping in dict.fromkeys(groupings):
            model.add_policy("g", "g", grouping.as_list())
        for policy in dict.fromkeys(policies):
            model.add_policy("p", "p", policy.as_list())
        # Role links are cached separately from the g rules.
        self.enforcer.build_role_links()

    @staticmethod
    def _error(operation: str, error: Exception) -> PolicyEngineError:
        return PolicyEngineError(
            code=ErrorCode.POLICY_ENGINE_FAILED,
            message=f"Policy engine {operation} failed: {error}",
            operation=operation,
            details={"error_type": type(error).__name__},
        )
