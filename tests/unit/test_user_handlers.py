"""Unit tests for registration, login and password change."""

from unittest.mock import AsyncMock, Mock

import pytest

from rbac_admin.application.commands import (
    AuthenticateUser,
    ChangePassword,
    DeleteUser,
    RegisterUser,
)
from rbac_admin.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from rbac_admin.application.commands.handlers.user_handlers import (
    ChangePasswordHandler,
    DeleteUserHandler,
    RegisterUserHandler,
)
from rbac_admin.application.errors import ApplicationErrorCode
from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.enums import UserStatus
from rbac_admin.domain.errors import PolicyEngineError, StorageError, StorageErrorCause


def _storage_error(cause: StorageErrorCause) -> StorageError:
    return StorageError(code=ErrorCode.STORAGE_FAILED, message="boom", cause=cause)


@pytest.fixture
def password_service():
    service = Mock()
    service.hash_password.side_effect = lambda password: f"hashed:{password}"
    service.verify_password.side_effect = (
        lambda password, password_hash: password_hash == f"hashed:{password}"
    )
    return service


@pytest.fixture
def users():
    users = AsyncMock()
    users.save.side_effect = lambda user: Success(value=_with_id(user, 10))
    users.update.side_effect = lambda user: Success(value=user)
    return users


def _with_id(user: User, user_id: int) -> User:
    user.id = user_id
    return user


@pytest.mark.unit
class TestRegisterUserHandler:
    @pytest.fixture
    def roles(self):
        known = {"user": Role(id=2, name="user")}
        roles = AsyncMock()
        roles.find_by_name.side_effect = lambda name: (
            Success(value=known[name])
            if name in known
            else Failure(error=_storage_error(StorageErrorCause.NOT_FOUND))
        )
        return roles

    @pytest.fixture
    def synchronizer(self):
        synchronizer = AsyncMock()
        synchronizer.attach_role.return_value = Success(value=True)
        return synchronizer

    @pytest.fixture
    def handler(self, users, roles, password_service, synchronizer, mock_logger):
        return RegisterUserHandler(
            user_repository=users,
            role_repository=roles,
            password_service=password_service,
            synchronizer=synchronizer,
            logger=mock_logger,
        )

    async def test_register_attaches_default_role(self, handler, users, synchronizer):
        result = await handler.handle(
            RegisterUser(username="dave", password="secret1", email="")
        )

        assert isinstance(result, Success)
        user = result.value
        assert user.id == 10
        assert user.password_hash == "hashed:secret1"
        assert user.email is None
        assert user.roles == ["user"]
        synchronizer.attach_role.assert_awaited_once()

    async def test_short_password_rejected(self, handler, users):
        result = await handler.handle(RegisterUser(username="dave", password="123"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED
        users.save.assert_not_called()

    async def test_duplicate_username_is_conflict(self, handler, users):
        users.save.side_effect = None
        users.save.return_value = Failure(
            error=_storage_error(StorageErrorCause.UNIQUE_VIOLATION)
        )

        result = await handler.handle(RegisterUser(username="admin", password="secret1"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT

    async def test_missing_default_role_still_registers(
        self, handler, roles, synchronizer, mock_logger
    ):
        roles.find_by_name.side_effect = None
        roles.find_by_name.return_value = Failure(
            error=_storage_error(StorageErrorCause.NOT_FOUND)
        )

        result = await handler.handle(RegisterUser(username="dave", password="secret1"))

        assert isinstance(result, Success)
        assert result.value.roles == []
        synchronizer.attach_role.assert_not_called()
        events = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert "user_default_role_missing" in events

    async def test_username_equal_to_role_name_is_conflict(self, handler, users):
        result = await handler.handle(RegisterUser(username="user", password="secret1"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.CONFLICT
        assert result.error.message == "Username is taken by a role: user"
        users.save.assert_not_called()

    async def test_role_lookup_backend_failure_is_not_treated_as_missing(
        self, handler, users, roles, mock_logger
    ):
        roles.find_by_name.side_effect = None
        roles.find_by_name.return_value = Failure(
            error=_storage_error(StorageErrorCause.TRANSIENT_BACKEND)
        )

        result = await handler.handle(RegisterUser(username="dave", password="secret1"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.STORAGE_FAILURE
        users.save.assert_not_called()
        events = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert "user_default_role_missing" not in events

    async def test_attach_store_failure_still_returns_account(
        self, handler, synchronizer, mock_logger
    ):
        synchronizer.attach_role.return_value = Failure(
            error=_storage_error(StorageErrorCause.TRANSIENT_BACKEND)
        )

        result = await handler.handle(RegisterUser(username="dave", password="secret1"))

        assert isinstance(result, Success)
        assert result.value.id == 10
        assert result.value.roles == []
        events = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert "user_default_role_attach_failed" in events

    async def test_attach_engine_failure_keeps_stored_membership(
        self, handler, synchronizer
    ):
        synchronizer.attach_role.return_value = Failure(
            error=PolicyEngineError(
                code=ErrorCode.POLICY_ENGINE_FAILED,
                message="Policy engine save failed",
                operation="save",
            )
        )

        result = await handler.handle(RegisterUser(username="dave", password="secret1"))

        assert isinstance(result, Success)
        assert result.value.roles == ["user"]


@pytest.mark.unit
class TestAuthenticateUserHandler:
    @pytest.fixture
    def token_service(self):
        service = Mock()
        service.expiration_minutes = 30
        service.generate_access_token.return_value = "signed.jwt.token"
        return service

    @pytest.fixture
    def handler(self, users, password_service, token_service, mock_logger):
        return AuthenticateUserHandler(
            user_repository=users,
            password_service=password_service,
            token_service=token_service,
            logger=mock_logger,
        )

    async def test_success_returns_bearer_token(self, handler, users, token_service):
        users.find_by_username.return_value = Success(
            value=User(id=1, username="admin", password_hash="hashed:123456")
        )

        result = await handler.handle(AuthenticateUser(username="admin", password="123456"))

        assert isinstance(result, Success)
        assert result.value.access_token == "signed.jwt.token"
        assert result.value.token_type == "bearer"
        assert result.value.expires_in == 1800
        token_service.generate_access_token.assert_called_once_with(
            user_id=1, username="admin"
        )

    async def test_unknown_user_is_unauthorized(self, handler, users):
        users.find_by_username.return_value = Failure(
            error=_storage_error(StorageErrorCause.NOT_FOUND)
        )

        result = await handler.handle(AuthenticateUser(username="nobody", password="x"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED
        assert result.error.message == "Invalid username or password"

    async def test_wrong_password_has_same_message(self, handler, users):
        users.find_by_username.return_value = Success(
            value=User(id=1, username="admin", password_hash="hashed:123456")
        )

        result = await handler.handle(AuthenticateUser(username="admin", password="nope"))

        assert isinstance(result, Failure)
        assert result.error.message == "Invalid username or password"

    async def test_disabled_account_rejected(self, handler, users, token_service):
        users.find_by_username.return_value = Success(
            value=User(
                id=1,
                username="admin",
                password_hash="hashed:123456",
                status=UserStatus.DISABLED,
            )
        )

        result = await handler.handle(AuthenticateUser(username="admin", password="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.UNAUTHORIZED
        token_service.generate_access_token.assert_not_called()

    async def test_backend_failure_is_storage_failure(self, handler, users):
        users.find_by_username.return_value = Failure(
            error=_storage_error(StorageErrorCause.TRANSIENT_BACKEND)
        )

        result = await handler.handle(AuthenticateUser(username="admin", password="x"))

        assert isinstance(result, Failure)
        assert result.error.code == ApplicationErrorCode.STORAGE_FAILURE


@pytest.mark.unit
class TestChangePasswordHandler:
    @pytest.fixture
    def handler(self, users, password_service, mock_logger):
        users.find_by_id.return_value = Success(
            value=User(id=4, username="erin", password_hash="hashed:oldpass")
        )
        return ChangePasswordHandler(
            user_repository=users, password_service=password_service, logger=mock_logger
        )

    async def test_change_rehashes(self, handler, users):
        result = await handler.handle(
            ChangePassword(user_id=4, old_password="oldpass", new_password="newpass")
        )

        assert isinstance(result, Success)
        updated = users.update.await_args.args[0]
        assert updated.password_hash == "hashed:newpass"

    async def test_wrong_old_password(self, handler, users):
        result = await handler.handle(
            ChangePassword(user_id=4, old_password="guess!", new_password="newpass")
        )

        assert isinstance(result, Failure)
        assert result.error.message == "Old password is incorrect"
        users.update.assert_not_called()


@pytest.mark.unit
class TestDeleteUserHandler:
    async def test_delete_goes_through_synchronizer(self, users, mock_logger):
        user = User(id=4, username="erin", password_hash="x", roles=["user"])
        users.find_by_id.return_value = Success(value=user)
        synchronizer = AsyncMock()
        synchronizer.remove_user.return_value = Success(value=None)
        handler = DeleteUserHandler(
            user_repository=users, synchronizer=synchronizer, logger=mock_logger
        )

        result = await handler.handle(DeleteUser(user_id=4))

        assert result == Success(value=None)
        users.find_by_id.assert_awaited_once_with(4, with_roles=True)
        synchronizer.remove_user.assert_awaited_once_with(user)
