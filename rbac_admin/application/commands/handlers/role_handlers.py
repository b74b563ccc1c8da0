"""Role command handlers.

Renames and deletions change the tuples stored in the policy engine, so
both end with a full rebuild through the PolicySynchronizer.
"""

from rbac_admin.application.commands.role_commands import (
    CreateRole,
    DeleteRole,
    UpdateRole,
)
from rbac_admin.application.errors import (
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)
from rbac_admin.application.services.policy_synchronizer import PolicySynchronizer
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Role
from rbac_admin.domain.errors import StorageError
from rbac_admin.domain.protocols import LoggerProtocol, RoleRepository


def _role_error(error: StorageError, name: str) -> ApplicationError:
    if error.is_unique_violation:
        return ApplicationError(
            code=ApplicationErrorCode.CONFLICT,
            message=f"Role already exists: {name}",
            domain_error=error,
        )
    return from_domain_error(error)


class CreateRoleHandler:
    def __init__(self, *, role_repository: RoleRepository, logger: LoggerProtocol) -> None:
        self._roles = role_repository
        self._logger = logger

    async def handle(self, cmd: CreateRole) -> Result[Role, ApplicationError]:
        match await self._roles.save(Role(name=cmd.name, description=cmd.description)):
            case Failure(error=error):
                return Failure(error=_role_error(error, cmd.name))
            case Success(value=role):
                self._logger.info("role_created", role_id=role.id, role=role.name)
                return Success(value=role)


class UpdateRoleHandler:
    """Handle UpdateRole; a changed name triggers a full engine rebuild."""

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

    async def handle(self, cmd: UpdateRole) -> Result[Role, ApplicationError]:
        match await self._roles.find_by_id(cmd.role_id):
            case Failure(error=error):
                return Failure(error=from_domain_error(error, "Role not found"))
            case Success(value=current):
                pass

        renamed = current.name != cmd.name
        current.name = cmd.name
        current.description = cmd.description

        match await self._roles.update(current):
            case Failure(error=error):
                return Failure(error=_role_error(error, cmd.name))
            case Success(value=role):
                pass

        self._logger.info("role_updated", role_id=role.id, role=role.name, renamed=renamed)
        if renamed:
            synced = await self._synchronizer.sync_all()
            if isinstance(synced, Failure):
                return Failure(error=from_domain_error(synced.error))
        return Success(value=role)


class DeleteRoleHandler:
    """Handle DeleteRole: cascade in the store, then rebuild the engine."""

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

    async def handle(self, cmd: DeleteRole) -> Result[None, ApplicationError]:
        match await self._roles.delete(cmd.role_id):
            case Failure(error=error) if error.is_not_found:
                return Failure(error=from_domain_error(error, "Role not found"))
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
        self._logger.info("role_deleted", role_id=cmd.role_id)

        synced = await self._synchronizer.sync_all()
        if isinstance(synced, Failure):
            return Failure(error=from_domain_error(synced.error))
        return Success(value=None)
