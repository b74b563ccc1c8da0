"""User account command handlers.

Registration attaches the default ``user`` role through the synchronizer
so the new membership reaches the policy engine immediately; deletion
removes the user's groupings the same way.
"""

from rbac_admin.application.commands.user_commands import (
    ChangePassword,
    DeleteUser,
    RegisterUser,
    UpdateUser,
)
from rbac_admin.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)
from rbac_admin.application.services.policy_synchronizer import PolicySynchronizer
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.enums import DefaultRole
from rbac_admin.domain.errors import PolicyEngineError, StorageError
from rbac_admin.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    RoleRepository,
    UserRepository,
)

MIN_PASSWORD_LENGTH = 6


def _user_error(error: StorageError) -> ApplicationError:
    if error.is_unique_violation:
        return ApplicationError(
            code=ApplicationErrorCode.CONFLICT,
            message="Username, email or phone already in use",
            domain_error=error,
        )
    if error.is_not_found:
        return from_domain_error(error, "User not found")
    return from_domain_error(error)


def _password_too_short() -> ApplicationError:
    return ApplicationError(
        code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
    )


class RegisterUserHandler:
    """Handle RegisterUser.

    Flow:
        1. Validate password length
        2. Reject a username equal to an existing role name
        3. Resolve the default role (absent: warn and continue)
        4. Hash password and insert the account
        5. Attach the default role (store, engine, checkpoint); a failure
           here is logged and the account is still returned
    """

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        password_service: PasswordHashingProtocol,
        synchronizer: PolicySynchronizer,
        logger: LoggerProtocol,
    ) -> None:
        self._users = user_repository
        self._roles = role_repository
        self._password_service = password_service
        self._synchronizer = synchronizer
        self._logger = logger

    async def handle(self, cmd: RegisterUser) -> Result[User, ApplicationError]:
        if len(cmd.password) < MIN_PASSWORD_LENGTH:
            return Failure(error=_password_too_short())

        # Usernames and role names share the engine's grouping namespace.
        match await self._roles.find_by_name(cmd.username):
            case Success():
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.CONFLICT,
                        message=f"Username is taken by a role: {cmd.username}",
                    )
                )
            case Failure(error=error) if not error.is_not_found:
                return Failure(error=from_domain_error(error))

        default_role: Role | None = None
        match await self._roles.find_by_name(DefaultRole.USER.value):
            case Success(value=default_role):
                pass
            case Failure(error=error) if error.is_not_found:
                self._logger.warning(
                    "user_default_role_missing",
                    username=cmd.username,
                    role=DefaultRole.USER.value,
                )
            case Failure(error=error):
                return Failure(error=from_domain_error(error))

        user = User(
            username=cmd.username,
            password_hash=self._password_service.hash_password(cmd.password),
            email=cmd.email or None,
            phone=cmd.phone or None,
            nickname=cmd.nickname,
        )
        match await self._users.save(user):
            case Failure(error=error):
                self._logger.warning(
                    "user_registration_failed",
                    username=cmd.username,
                    error_code=error.code.value,
                )
                return Failure(error=_user_error(error))
            case Success(value=created):
                pass

        if default_role is not None:
            match await self._synchronizer.attach_role(created, default_role):
                case Success():
                    created.roles = [default_role.name]
                case Failure(error=error):
                    # The account is already committed.
                    self._logger.warning(
                        "user_default_role_attach_failed",
                        user_id=created.id,
                        role=default_role.name,
                        error_code=error.code.value,
                    )
                    if isinstance(error, PolicyEngineError):
                        # Membership is stored; the next rebuild converges.
                        created.roles = [default_role.name]

        self._logger.info("user_registered", user_id=created.id, username=created.username)
        return Success(value=created)


class UpdateUserHandler:
    def __init__(self, *, user_repository: UserRepository, logger: LoggerProtocol) -> None:
        self._users = user_repository
        self._logger = logger

    async def handle(self, cmd: UpdateUser) -> Result[User, ApplicationError]:
        match await self._users.find_by_id(cmd.user_id, with_roles=True):
            case Failure(error=error):
                return Failure(error=_user_error(error))
            case Success(value=user):
                pass

        if cmd.email is not None:
            user.email = cmd.email or None
        if cmd.phone is not None:
            user.phone = cmd.phone or None
        if cmd.nickname is not None:
            user.nickname = cmd.nickname
        if cmd.avatar is not None:
            user.avatar = cmd.avatar
        if cmd.status is not None:
            user.status = cmd.status

        match await self._users.update(user):
            case Failure(error=error):
                return Failure(error=_user_error(error))
            case Success(value=updated):
                self._logger.info("user_updated", user_id=updated.id)
                return Success(value=updated)


class DeleteUserHandler:
    """Handle DeleteUser: soft-delete and drop the user's groupings."""

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        synchronizer: PolicySynchronizer,
        logger: LoggerProtocol,
    ) -> None:
        self._users = user_repository
        self._synchronizer = synchronizer
        self._logger = logger

    async def handle(self, cmd: DeleteUser) -> Result[None, ApplicationError]:
        match await self._users.find_by_id(cmd.user_id, with_roles=True):
            case Failure(error=error):
                return Failure(error=_user_error(error))
            case Success(value=user):
                pass

        removed = await self._synchronizer.remove_user(user)
        if isinstance(removed, Failure):
            return Failure(error=from_domain_error(removed.error))
        self._logger.info("user_deleted", user_id=user.id, username=user.username)
        return Success(value=None)


class ChangePasswordHandler:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._users = user_repository
        self._password_service = password_service
        self._logger = logger

    async def handle(self, cmd: ChangePassword) -> Result[None, ApplicationError]:
        if len(cmd.new_password) < MIN_PASSWORD_LENGTH:
            return Failure(error=_password_too_short())

        match await self._users.find_by_id(cmd.user_id):
            case Failure(error=error):
                return Failure(error=_user_error(error))
            case Success(value=user):
                pass

        if not self._password_service.verify_password(cmd.old_password, user.password_hash):
            self._logger.warning("password_change_rejected", user_id=user.id)
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                    message="Old password is incorrect",
                )
            )

        user.password_hash = self._password_service.hash_password(cmd.new_password)
        updated = await self._users.update(user)
        if isinstance(updated, Failure):
            return Failure(error=_user_error(updated.error))
        self._logger.info("password_changed", user_id=user.id)
        return Success(value=None)
