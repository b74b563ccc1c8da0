"""Handlers for grant, revoke and role assignment.

Flow (grant / revoke):
    1. Validate role, path and method
    2. Resolve the role (and, for revoke, the permission)
    3. Delegate to the PolicySynchronizer (store, engine, checkpoint)

Errors:
    - Empty fields or a method outside GET/POST/PUT/DELETE/PATCH:
      COMMAND_VALIDATION_FAILED
    - Unknown role / permission / grant: NOT_FOUND
    - Grant of an existing tuple: CONFLICT
    - Store or engine failure: STORAGE_FAILURE / ENGINE_FAILURE
"""

from rbac_admin.application.commands.policy_commands import (
    AssignUserRoles,
    GrantPolicy,
    RevokePolicy,
)
from rbac_admin.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)
from rbac_admin.application.services.policy_synchronizer import PolicySynchronizer
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.enums import HttpMethod
from rbac_admin.domain.protocols import (
    LoggerProtocol,
    PermissionRepository,
    RoleRepository,
    UserRepository,
)
from rbac_admin.domain.value_objects import GrantOutcome, PolicyRule, RevokeOutcome


def validate_policy_fields(role: str, path: str, method: str) -> ApplicationError | None:
    """Return a validation error for a malformed policy tuple, else None."""
    if not role or not path or not method:
        return ApplicationError(
            code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            message="Role, path and method must not be empty",
        )
    if not HttpMethod.is_valid(method):
        return ApplicationError(
            code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            message=f"Unsupported HTTP method: {method}",
            details={"allowed": ",".join(HttpMethod.values())},
        )
    if not path.startswith("/"):
        return ApplicationError(
            code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            message="Path must start with '/'",
        )
    return None


class GrantPolicyHandler:
    """Handle GrantPolicy: add (role, path, method) to the store and engine."""

    def __init__(
        self,
        *,
        role_repository: RoleRepository,
        synchronizer: PolicySynchronizer,
        logger: LoggerProtocol,
    ) -> None:
        self._roles = role_repository
        self._synchronizer = synchronizer
        self._logger = logger

    async def handle(self, cmd: GrantPolicy) -> Result[PolicyRule, ApplicationError]:
        invalid = validate_policy_fields(cmd.role, cmd.path, cmd.method)
        if invalid is not None:
            self._logger.warning(
                "policy_grant_rejected", role=cmd.role, reason=invalid.message
            )
            return Failure(error=invalid)

        match await self._roles.find_by_name(cmd.role):
            case Failure(error=error):
                return Failure(error=from_domain_error(error, f"Role not found: {cmd.role}"))
            case Success(value=role):
                pass

        description = f"{cmd.method} {cmd.path} permission"
        match await self._synchronizer.grant(role, cmd.path, cmd.method, description):
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=GrantOutcome.ALREADY_EXISTS):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.CONFLICT,
                        message="Policy already exists",
                    )
                )
            case Success():
                return Success(value=PolicyRule(role.name, cmd.path, cmd.method))


class RevokePolicyHandler:
    """Handle RevokePolicy: remove the tuple and any orphaned permission."""

    def __init__(
        self,
        *,
        role_repository: RoleRepository,
        permission_repository: PermissionRepository,
        synchronizer: PolicySynchronizer,
        logger: LoggerProtocol,
    ) -> None:
        self._roles = role_repository
        self._permissions = permission_repository
        self._synchronizer = synchronizer
        self._logger = logger

    async def handle(self, cmd: RevokePolicy) -> Result[PolicyRule, ApplicationError]:
        invalid = validate_policy_fields(cmd.role, cmd.path, cmd.method)
        if invalid is not None:
            self._logger.warning(
                "policy_revoke_rejected", role=cmd.role, reason=invalid.message
            )
            return Failure(error=invalid)

        match await self._roles.find_by_name(cmd.role):
            case Failure(error=error):
                return Failure(error=from_domain_error(error, f"Role not found: {cmd.role}"))
            case Success(value=role):
                pass

        match await self._permissions.find(cmd.path, cmd.method):
            case Failure(error=error):
                return Failure(
                    error=from_domain_error(
                        error, f"Permission not found: {cmd.method} {cmd.path}"
                    )
                )
            case Success(value=permission):
                pass

        match await self._synchronizer.revoke(
            role, permission.id, cmd.path, cmd.method  # type: ignore[arg-type]
        ):
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=RevokeOutcome.NOT_FOUND):
                return Failure(
                    error=ApplicationError(
                        code=ApplicationErrorCode.NOT_FOUND,
                        message="Policy does not exist",
                    )
                )
            case Success():
                return Success(value=PolicyRule(role.name, cmd.path, cmd.method))


class AssignUserRolesHandler:
    """Handle AssignUserRoles: replace a user's roles, then rebuild the engine."""

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        role_repository: RoleRepository,
        synchronizer: PolicySynchronizer,
    ) -> None:
        self._users = user_repository
        self._roles = role_repository
        self._synchronizer = synchronizer

    async def handle(self, cmd: AssignUserRoles) -> Result[list[str], ApplicationError]:
        requested = list(dict.fromkeys(name for name in cmd.roles if name))
        if not requested:
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                    message="At least one role is required",
                )
            )

        match await self._users.find_by_id(cmd.user_id):
            case Failure(error=error):
                return Failure(error=from_domain_error(error, "User not found"))
            case Success(value=user):
                pass

        match await self._roles.find_by_names(requested):
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=roles):
                pass

        if len(roles) != len(requested):
            missing = sorted(set(requested) - {role.name for role in roles})
            return Failure(
                error=ApplicationError(
                    code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                    message="Some roles do not exist",
                    details={"missing": ",".join(missing)},
                )
            )

        match await self._synchronizer.assign_roles(user, roles):
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success():
                return Success(value=[role.name for role in roles])
