"""Authorization gate: the per-request decision point.

For every protected request:
    1. The subject is the username from the verified token; none => deny
       (UNAUTHENTICATED).
    2. The user is resolved with its live roles; unknown or soft-deleted
       => deny (UNAUTHENTICATED).
    3. The engine is asked once per role with the raw request path and
       method. The first allow wins; an engine error stops the loop with
       ENGINE_ERROR; no allow => FORBIDDEN.

The gate never mutates the engine or the store. Log records carry the
username, path, method and role names only.
"""

from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.protocols import LoggerProtocol, PolicyEngine, UserRepository
from rbac_admin.domain.value_objects import Decision, DenyReason, RequestContext


class AuthorizationGate:
    """Evaluates a RequestContext against the policy engine."""

    def __init__(
        self,
        *,
        engine: PolicyEngine,
        user_repository: UserRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._engine = engine
        self._users = user_repository
        self._logger = logger

    async def check(self, context: RequestContext) -> Decision:
        if not context.username:
            self._logger.warning(
                "authorization_denied",
                reason=DenyReason.UNAUTHENTICATED.value,
                path=context.path,
                method=context.method,
            )
            return Decision.deny(DenyReason.UNAUTHENTICATED)

        match await self._users.find_by_username(context.username, with_roles=True):
            case Failure(error=error) if error.is_not_found:
                self._logger.warning(
                    "authorization_denied",
                    reason=DenyReason.UNAUTHENTICATED.value,
                    username=context.username,
                    path=context.path,
                    method=context.method,
                )
                return Decision.deny(DenyReason.UNAUTHENTICATED)
            case Failure(error=error):
                self._logger.error(
                    "authorization_user_lookup_failed",
                    username=context.username,
                    error_code=error.code.value,
                    error_message=error.message,
                )
                return Decision.deny(DenyReason.STORAGE_ERROR)
            case Success(value=user):
                roles = user.roles

        self._logger.info(
            "authorization_check_started",
            username=context.username,
            path=context.path,
            method=context.method,
            roles=roles,
        )

        for role in roles:
            match self._engine.enforce(role, context.path, context.method):
                case Success(value=True):
                    self._logger.info(
                        "authorization_allowed",
                        username=context.username,
                        role=role,
                        path=context.path,
                        method=context.method,
                    )
                    return Decision.allow(role)
                case Success():
                    continue
                case Failure(error=error):
                    self._logger.error(
                        "authorization_engine_error",
                        username=context.username,
                        role=role,
                        path=context.path,
                        method=context.method,
                        error_message=error.message,
                    )
                    return Decision.deny(DenyReason.ENGINE_ERROR)

        self._logger.warning(
            "authorization_denied",
            reason=DenyReason.FORBIDDEN.value,
            username=context.username,
            path=context.path,
            method=context.method,
            roles=roles,
        )
        return Decision.deny(DenyReason.FORBIDDEN)
