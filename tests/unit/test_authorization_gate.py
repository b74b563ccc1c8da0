"""Unit tests for AuthorizationGate.

Tests cover:
- Missing subject and unknown user deny as UNAUTHENTICATED
- Storage failure denies as STORAGE_ERROR
- First allowing role wins; no allow denies as FORBIDDEN
- Engine error stops evaluation with ENGINE_ERROR
- The gate never mutates the engine
"""

from unittest.mock import AsyncMock, Mock

import pytest

from rbac_admin.application.services import AuthorizationGate
from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.entities import User
from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause
from rbac_admin.domain.value_objects import DenyReason, RequestContext


def _user(*roles: str) -> User:
    return User(id=1, username="alice", password_hash="x", roles=list(roles))


def _context(username: str | None = "alice") -> RequestContext:
    return RequestContext(username=username, path="/api/v1/test", method="GET")


def _gate(engine=None, users=None, logger=None) -> AuthorizationGate:
    return AuthorizationGate(
        engine=engine or Mock(),
        user_repository=users or AsyncMock(),
        logger=logger or Mock(),
    )


@pytest.mark.unit
class TestAuthorizationGateSubject:
    async def test_missing_username_is_unauthenticated(self):
        users = AsyncMock()
        decision = await _gate(users=users).check(_context(username=None))

        assert decision.allowed is False
        assert decision.reason is DenyReason.UNAUTHENTICATED
        users.find_by_username.assert_not_called()

    async def test_unknown_user_is_unauthenticated(self):
        users = AsyncMock()
        users.find_by_username.return_value = Failure(
            error=StorageError(
                code=ErrorCode.RESOURCE_NOT_FOUND,
                message="User not found: alice",
                cause=StorageErrorCause.NOT_FOUND,
            )
        )

        decision = await _gate(users=users).check(_context())

        assert decision.reason is DenyReason.UNAUTHENTICATED

    async def test_storage_failure_is_storage_error(self):
        users = AsyncMock()
        users.find_by_username.return_value = Failure(
            error=StorageError(
                code=ErrorCode.STORAGE_UNAVAILABLE,
                message="Database operation failed",
                cause=StorageErrorCause.TRANSIENT_BACKEND,
            )
        )

        decision = await _gate(users=users).check(_context())

        assert decision.reason is DenyReason.STORAGE_ERROR

    async def test_user_is_resolved_with_roles(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user())

        await _gate(users=users).check(_context())

        users.find_by_username.assert_awaited_once_with("alice", with_roles=True)


@pytest.mark.unit
class TestAuthorizationGateDecision:
    async def test_first_allowing_role_wins(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user("user", "admin", "ops"))
        engine = Mock()
        engine.enforce.side_effect = [Success(value=False), Success(value=True)]

        decision = await _gate(engine=engine, users=users).check(_context())

        assert decision.allowed is True
        assert decision.matched_role == "admin"
        assert engine.enforce.call_count == 2
        engine.enforce.assert_called_with("admin", "/api/v1/test", "GET")

    async def test_no_allowing_role_is_forbidden(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user("user"))
        engine = Mock()
        engine.enforce.return_value = Success(value=False)

        decision = await _gate(engine=engine, users=users).check(_context())

        assert decision.allowed is False
        assert decision.reason is DenyReason.FORBIDDEN

    async def test_user_without_roles_is_forbidden(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user())
        engine = Mock()

        decision = await _gate(engine=engine, users=users).check(_context())

        assert decision.reason is DenyReason.FORBIDDEN
        engine.enforce.assert_not_called()

    async def test_engine_error_stops_evaluation(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user("user", "admin"))
        engine = Mock()
        engine.enforce.return_value = Failure(
            error=PolicyEngineError(
                code=ErrorCode.POLICY_ENGINE_FAILED,
                message="matcher failed",
                operation="enforce",
            )
        )
        logger = Mock()

        decision = await _gate(engine=engine, users=users, logger=logger).check(
            _context()
        )

        assert decision.reason is DenyReason.ENGINE_ERROR
        assert engine.enforce.call_count == 1
        assert logger.error.call_args.args[0] == "authorization_engine_error"

    async def test_gate_never_mutates_engine(self):
        users = AsyncMock()
        users.find_by_username.return_value = Success(value=_user("admin"))
        engine = Mock()
        engine.enforce.return_value = Success(value=True)

        await _gate(engine=engine, users=users).check(_context())

        engine.add_policy.assert_not_called()
        engine.remove_policy.assert_not_called()
        engine.add_grouping.assert_not_called()
        engine.save.assert_not_called()
