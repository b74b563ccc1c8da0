"""Integration tests for CasbinPolicyEngine over a real enforcer.

Tests cover:
- add/remove report whether the relation changed
- Role resolution through G and keyMatch resource patterns
- load replaces P and G wholesale
- rebuild reads its projection under the write lock
- save writes the checkpoint table
"""

import asyncio

import pytest
from sqlalchemy import select

from rbac_admin.core.config import DEFAULT_MODEL_PATH
from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.errors import StorageError, StorageErrorCause
from rbac_admin.domain.value_objects import GroupingRule, PolicyRule
from rbac_admin.infrastructure.authorization import (
    PolicyModelNotFoundError,
    build_enforcer,
)
from rbac_admin.infrastructure.persistence.models import CasbinRule

RULE = PolicyRule("admin", "/api/v1/users/:id/password", "PUT")


@pytest.mark.integration
class TestPolicyEngine:
    async def test_add_and_remove_report_change(self, policy_engine):
        assert await policy_engine.add_policy(RULE) == Success(value=True)
        assert await policy_engine.add_policy(RULE) == Success(value=False)
        assert await policy_engine.remove_policy(RULE) == Success(value=True)
        assert await policy_engine.remove_policy(RULE) == Success(value=False)

    async def test_enforce_resolves_roles_through_groupings(self, policy_engine):
        await policy_engine.add_policy(RULE)
        await policy_engine.add_grouping(GroupingRule("alice", "admin"))

        assert policy_engine.enforce("alice", "/api/v1/users/7/password", "PUT") == Success(
            value=True
        )
        assert policy_engine.enforce("admin", "/api/v1/users/7/password", "PUT") == Success(
            value=True
        )
        assert policy_engine.enforce("alice", "/api/v1/users/7/password", "GET") == Success(
            value=False
        )
        assert policy_engine.enforce("bob", "/api/v1/users/7/password", "PUT") == Success(
            value=False
        )

    async def test_removed_grouping_stops_matching(self, policy_engine):
        await policy_engine.add_policy(RULE)
        grouping = GroupingRule("alice", "admin")
        await policy_engine.add_grouping(grouping)

        assert await policy_engine.remove_grouping(grouping) == Success(value=True)

        assert policy_engine.enforce("alice", "/api/v1/users/7/password", "PUT") == Success(
            value=False
        )

    async def test_load_replaces_everything(self, policy_engine):
        await policy_engine.add_policy(RULE)
        await policy_engine.add_grouping(GroupingRule("alice", "admin"))
        replacement = PolicyRule("user", "/api/v1/users/*", "GET")

        result = await policy_engine.load([GroupingRule("bob", "user")], [replacement])

        assert result == Success(value=None)
        assert policy_engine.get_policies() == [replacement]
        assert policy_engine.get_groupings() == [GroupingRule("bob", "user")]
        assert policy_engine.enforce("bob", "/api/v1/users/3", "GET") == Success(value=True)
        assert policy_engine.enforce("alice", "/api/v1/users/7/password", "PUT") == Success(
            value=False
        )

    async def test_rebuild_applies_concurrent_add_after_replace(self, policy_engine):
        replacement = PolicyRule("user", "/api/v1/users/*", "GET")
        pending = []

        async def loader():
            pending.append(asyncio.create_task(policy_engine.add_policy(RULE)))
            await asyncio.sleep(0)
            assert RULE not in policy_engine.get_policies()
            return Success(value=([], [replacement]))

        assert await policy_engine.rebuild(loader) == Success(value=None)
        assert await pending[0] == Success(value=True)

        assert set(policy_engine.get_policies()) == {replacement, RULE}

    async def test_rebuild_loader_failure_keeps_state(self, policy_engine):
        await policy_engine.add_policy(RULE)
        failure = Failure(
            error=StorageError(
                code=ErrorCode.STORAGE_UNAVAILABLE,
                message="Database operation failed: OperationalError",
                cause=StorageErrorCause.TRANSIENT_BACKEND,
            )
        )

        async def loader():
            return failure

        assert await policy_engine.rebuild(loader) == failure
        assert policy_engine.get_policies() == [RULE]

    async def test_clear_policy_empties_relations(self, policy_engine):
        await policy_engine.add_policy(RULE)

        await policy_engine.clear_policy()

        assert policy_engine.get_policies() == []
        assert policy_engine.get_groupings() == []

    async def test_save_writes_checkpoint(self, policy_engine, session):
        await policy_engine.add_policy(RULE)
        await policy_engine.add_grouping(GroupingRule("alice", "admin"))

        assert await policy_engine.save() == Success(value=None)

        rows = (await session.scalars(select(CasbinRule).order_by(CasbinRule.ptype))).all()
        assert [(row.ptype, row.v0, row.v1) for row in rows] == [
            ("g", "alice", "admin"),
            ("p", "admin", "/api/v1/users/:id/password"),
        ]

    def test_missing_model_file(self, test_database, tmp_path):
        with pytest.raises(PolicyModelNotFoundError):
            build_enforcer(tmp_path / "missing.conf", test_database.engine)

    def test_default_model_ships_with_package(self):
        assert DEFAULT_MODEL_PATH.is_file()
