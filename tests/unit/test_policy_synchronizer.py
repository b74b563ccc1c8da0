"""Unit tests for PolicySynchronizer failure handling.

Tests cover:
- Store failure aborts before the engine is touched
- Engine failure triggers a full rebuild; the original error surfaces
  only when the rebuild also fails
- Checkpoint failure is logged and returned
- Store, engine, checkpoint ordering
"""

from unittest.mock import AsyncMock, Mock, call

import pytest

from rbac_admin.application.services import PolicySynchronizer
from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause
from rbac_admin.domain.value_objects import (
    GrantOutcome,
    GroupingRule,
    PolicyRule,
    RevokeOutcome,
)

ROLE = Role(id=2, name="user")
RULE = PolicyRule("user", "/api/v1/permissions/policies", "GET")


def _engine_error(operation: str) -> PolicyEngineError:
    return PolicyEngineError(
        code=ErrorCode.POLICY_ENGINE_FAILED,
        message=f"Policy engine {operation} failed",
        operation=operation,
    )


def _storage_error() -> StorageError:
    return StorageError(
        code=ErrorCode.STORAGE_UNAVAILABLE,
        message="Database operation failed: OperationalError",
        cause=StorageErrorCause.TRANSIENT_BACKEND,
    )


@pytest.fixture
def engine():
    engine = Mock()
    engine.add_policy = AsyncMock(return_value=Success(value=True))
    engine.remove_policy = AsyncMock(return_value=Success(value=True))
    engine.add_grouping = AsyncMock(return_value=Success(value=True))
    engine.remove_grouping = AsyncMock(return_value=Success(value=True))
    engine.loaded = None

    async def rebuild(loader):
        projection = await loader()
        if isinstance(projection, Failure):
            return projection
        engine.loaded = projection.value
        return Success(value=None)

    engine.rebuild = AsyncMock(side_effect=rebuild)
    engine.save = AsyncMock(return_value=Success(value=None))
    engine.get_policies.return_value = []
    engine.get_groupings.return_value = []
    return engine


@pytest.fixture
def users():
    users = AsyncMock()
    users.list_groupings.return_value = Success(value=[GroupingRule("alice", "user")])
    users.add_role.return_value = Success(value=True)
    users.soft_delete.return_value = Success(value=None)
    users.assign_roles.return_value = Success(value=None)
    return users


@pytest.fixture
def permissions():
    permissions = AsyncMock()
    permissions.list_policies.return_value = Success(value=[RULE])
    permissions.grant_pair.return_value = Success(value=GrantOutcome.CREATED)
    permissions.revoke.return_value = Success(value=RevokeOutcome.REMOVED)
    return permissions


@pytest.fixture
def synchronizer(engine, users, permissions, mock_logger):
    return PolicySynchronizer(
        engine=engine,
        user_repository=users,
        permission_repository=permissions,
        logger=mock_logger,
    )


def _events(logger_method: Mock) -> list[str]:
    return [c.args[0] for c in logger_method.call_args_list]


@pytest.mark.unit
class TestSyncAll:
    async def test_loads_projection_then_saves(self, synchronizer, engine):
        result = await synchronizer.sync_all()

        assert isinstance(result, Success)
        assert engine.loaded == ([GroupingRule("alice", "user")], [RULE])
        engine.save.assert_awaited_once()

    async def test_store_failure_skips_engine(self, synchronizer, engine, permissions):
        permissions.list_policies.return_value = Failure(error=_storage_error())

        result = await synchronizer.sync_all()

        assert isinstance(result, Failure)
        assert engine.loaded is None
        engine.save.assert_not_called()

    async def test_save_failure_is_returned(self, synchronizer, engine, mock_logger):
        engine.save.return_value = Failure(error=_engine_error("save"))

        result = await synchronizer.sync_all()

        assert isinstance(result, Failure)
        assert result.error.operation == "save"
        assert "policy_sync_failed" in _events(mock_logger.error)


@pytest.mark.unit
class TestGrant:
    async def test_store_then_engine_then_save(self, synchronizer, engine, permissions):
        manager = Mock()
        manager.attach_mock(permissions.grant_pair, "grant_pair")
        manager.attach_mock(engine.add_policy, "add_policy")
        manager.attach_mock(engine.save, "save")

        result = await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        assert result == Success(value=GrantOutcome.CREATED)
        assert [c[0] for c in manager.mock_calls] == ["grant_pair", "add_policy", "save"]
        engine.add_policy.assert_awaited_once_with(RULE)

    async def test_store_failure_leaves_engine_untouched(
        self, synchronizer, engine, permissions
    ):
        permissions.grant_pair.return_value = Failure(error=_storage_error())

        result = await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        assert isinstance(result, Failure)
        engine.add_policy.assert_not_called()
        engine.save.assert_not_called()

    async def test_engine_failure_recovered_by_rebuild(
        self, synchronizer, engine, mock_logger
    ):
        engine.add_policy.return_value = Failure(error=_engine_error("add_policy"))

        result = await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        assert result == Success(value=GrantOutcome.CREATED)
        engine.rebuild.assert_awaited_once()
        assert "policy_engine_diverged" in _events(mock_logger.warning)

    async def test_engine_failure_and_failed_rebuild_returns_original_error(
        self, synchronizer, engine, mock_logger
    ):
        engine.add_policy.return_value = Failure(error=_engine_error("add_policy"))
        engine.rebuild.side_effect = None
        engine.rebuild.return_value = Failure(error=_engine_error("rebuild"))

        result = await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        assert isinstance(result, Failure)
        assert result.error.operation == "add_policy"
        assert "policy_resync_required" in _events(mock_logger.warning)

    async def test_checkpoint_failure_is_returned(self, synchronizer, engine, mock_logger):
        engine.save.return_value = Failure(error=_engine_error("save"))

        result = await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        assert isinstance(result, Failure)
        assert "policy_checkpoint_failed" in _events(mock_logger.error)

    async def test_default_description(self, synchronizer, permissions):
        await synchronizer.grant(ROLE, RULE.resource, RULE.action)

        permissions.grant_pair.assert_awaited_once_with(
            2, RULE.resource, RULE.action, f"GET {RULE.resource}"
        )


@pytest.mark.unit
class TestMembership:
    async def test_remove_user_drops_each_grouping(self, synchronizer, engine, users):
        user = User(id=5, username="bob", password_hash="x", roles=["user", "ops"])

        result = await synchronizer.remove_user(user)

        assert isinstance(result, Success)
        users.soft_delete.assert_awaited_once_with(5)
        assert engine.remove_grouping.await_args_list == [
            call(GroupingRule("bob", "user")),
            call(GroupingRule("bob", "ops")),
        ]
        engine.save.assert_awaited_once()

    async def test_attach_role_adds_grouping(self, synchronizer, engine, users):
        user = User(id=5, username="bob", password_hash="x")

        result = await synchronizer.attach_role(user, ROLE)

        assert result == Success(value=True)
        users.add_role.assert_awaited_once_with(5, 2)
        engine.add_grouping.assert_awaited_once_with(GroupingRule("bob", "user"))

    async def test_assign_roles_rebuilds(self, synchronizer, engine, users):
        user = User(id=5, username="bob", password_hash="x")
        admin = Role(id=1, name="admin")

        result = await synchronizer.assign_roles(user, [admin])

        assert isinstance(result, Success)
        users.assign_roles.assert_awaited_once_with(5, [1])
        engine.rebuild.assert_awaited_once()
        engine.save.assert_awaited_once()
