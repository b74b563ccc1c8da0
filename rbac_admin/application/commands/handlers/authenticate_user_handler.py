"""Login handler: verify credentials and issue an access token.

Unknown users, wrong passwords and disabled accounts all fail with
UNAUTHORIZED; the message does not reveal which check failed except for
disabled accounts.
"""

from dataclasses import dataclass

from rbac_admin.application.commands.user_commands import AuthenticateUser
from rbac_admin.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    TokenServiceProtocol,
    UserRepository,
)


@dataclass(frozen=True, kw_only=True)
class AccessToken:
    access_token: str
    expires_in: int
    token_type: str = "bearer"


_INVALID_CREDENTIALS = ApplicationError(
    code=ApplicationErrorCode.UNAUTHORIZED,
    message="Invalid username or password",
)


class AuthenticateUserHandler:
    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: TokenServiceProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._users = user_repository
        self._password_service = password_service
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: AuthenticateUser) -> Result[AccessToken, ApplicationError]:
        match await self._users.find_by_username(cmd.username):
            case Failure(error=error) if error.is_not_found:
                self._logger.warning("login_failed", username=cmd.username, reason="unknown_user")
                return Failure(error=_INVALID_CREDENTIALS)
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=user):
                pass

        if not self._password_service.verify_password(cmd.password, user.password_hash):
            self._logger.warning("login_failed", username=cmd.username, reason="bad_password")
            return Failure(error=_INVALID_CREDENTIALS)

        if not user.is_enabled():
            self._logger.warning("login_failed", username=cmd.username, reason="disabled")
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.UNAUTHORIZED,
                    message="User account is disabled",
                )
            )

        token = self._token_service.generate_access_token(
            user_id=user.id,  # type: ignore[arg-type]
            username=user.username,
        )
        self._logger.info("login_succeeded", user_id=user.id, username=user.username)
        return Success(
            value=AccessToken(
                access_token=token,
                expires_in=self._token_service.expiration_minutes * 60,
            )
        )
