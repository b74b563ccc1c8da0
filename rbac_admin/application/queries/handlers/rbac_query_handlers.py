"""Read-side handlers for users, roles and policies.

``ListPoliciesHandler`` reads the engine rather than the store: it reports
what enforcement actually sees.
"""

from rbac_admin.application.errors import ApplicationError, from_domain_error
from rbac_admin.application.queries.rbac_queries import (
    GetRole,
    GetUser,
    ListPolicies,
    ListRoles,
    ListUsers,
)
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.protocols import PolicyEngine, RoleRepository, UserRepository
from rbac_admin.domain.value_objects import Page, PolicyRule

MAX_PAGE_SIZE = 100


class ListPoliciesHandler:
    def __init__(self, *, engine: PolicyEngine) -> None:
        self._engine = engine

    async def handle(self, query: ListPolicies) -> Result[list[PolicyRule], ApplicationError]:
        return Success(value=sorted(self._engine.get_policies(), key=str))


class ListRolesHandler:
    def __init__(self, *, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    async def handle(self, query: ListRoles) -> Result[list[Role], ApplicationError]:
        match await self._roles.list_all():
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=roles):
                return Success(value=roles)


class GetRoleHandler:
    def __init__(self, *, role_repository: RoleRepository) -> None:
        self._roles = role_repository

    async def handle(self, query: GetRole) -> Result[Role, ApplicationError]:
        match await self._roles.find_by_id(query.role_id):
            case Failure(error=error) if error.is_not_found:
                return Failure(error=from_domain_error(error, "Role not found"))
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=role):
                return Success(value=role)


class GetUserHandler:
    def __init__(self, *, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def handle(self, query: GetUser) -> Result[User, ApplicationError]:
        match await self._users.find_by_id(query.user_id, with_roles=True):
            case Failure(error=error) if error.is_not_found:
                return Failure(error=from_domain_error(error, "User not found"))
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=user):
                return Success(value=user)


class ListUsersHandler:
    """Page through live users; page and size are clamped to sane bounds."""

    def __init__(self, *, user_repository: UserRepository) -> None:
        self._users = user_repository

    async def handle(self, query: ListUsers) -> Result[Page[User], ApplicationError]:
        page = max(query.page, 1)
        page_size = min(max(query.page_size, 1), MAX_PAGE_SIZE)
        match await self._users.list_page(page=page, page_size=page_size):
            case Failure(error=error):
                return Failure(error=from_domain_error(error))
            case Success(value=result):
                return Success(value=result)
