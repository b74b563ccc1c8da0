"""First-run seeding of the identity store and policy engine.

Steps, each idempotent so that a run interrupted at any point can simply
be repeated:

    1. Create the schema.
    2. Build the policy engine from the model file and load it from the
       store.
    3. Upsert the default roles.
    4. Upsert the permission catalogue.
    5. Rebind ``admin`` to every permission and ``user`` to its read-only
       subset.
    6. Full rebuild of the engine.
    7. Ensure the administrator account exists and holds ``admin``; full
       rebuild again.

Runs before the HTTP listener accepts requests.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from rbac_admin.application.services.permission_catalogue import (
    PERMISSION_CATALOGUE,
    USER_ROLE_PERMISSIONS,
)
from rbac_admin.application.services.policy_synchronizer import PolicySynchronizer
from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.core.errors import DomainError
from rbac_admin.domain.entities import Role, User
from rbac_admin.domain.enums import DefaultRole
from rbac_admin.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    PermissionRepository,
    PolicyEngine,
    RoleRepository,
    UserRepository,
)

T = TypeVar("T")


class BootstrapError(RuntimeError):
    """A seeding step failed; the service must not start."""


class Repositories(Protocol):
    """Session-bound repositories used by bootstrap."""

    users: UserRepository
    roles: RoleRepository
    permissions: PermissionRepository


class Bootstrapper:
    """Runs the startup seeding sequence.

    Args:
        create_schema: Creates missing tables.
        engine_factory: Builds the policy engine (fails if the model file
            is missing).
        open_repositories: Opens a session and returns repositories bound
            to it, as an async context manager.
        password_service: Hashes the administrator's initial password.
        admin_username, admin_password, admin_email: Administrator account.
    """

    def __init__(
        self,
        *,
        create_schema: Callable[[], Awaitable[None]],
        engine_factory: Callable[[], PolicyEngine],
        open_repositories: Callable[[], "RepositoryScope"],
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
        admin_username: str = "admin",
        admin_password: str = "123456",
        admin_email: str = "admin@example.com",
    ) -> None:
        self._create_schema = create_schema
        self._engine_factory = engine_factory
        self._open_repositories = open_repositories
        self._password_service = password_service
        self._logger = logger
        self._admin_username = admin_username
        self._admin_password = admin_password
        self._admin_email = admin_email

    async def run(self) -> PolicyEngine:
        """Execute every step and return the loaded policy engine.

        Raises:
            BootstrapError: If any step fails.
            PolicyModelNotFoundError: If the model file is missing.
        """
        await self._create_schema()
        engine = self._engine_factory()

        async with self._open_repositories() as repos:
            synchronizer = PolicySynchronizer(
                engine=engine,
                user_repository=repos.users,
                permission_repository=repos.permissions,
                logger=self._logger,
            )
            await _expect(synchronizer.load_engine(), "load_engine")

            roles: dict[DefaultRole, Role] = {}
            for default_role in DefaultRole:
                roles[default_role] = await _expect(
                    repos.roles.upsert(default_role.value, default_role.description),
                    "seed_roles",
                )

            for entry in PERMISSION_CATALOGUE:
                await _expect(
                    repos.permissions.upsert(
                        entry.resource, entry.action, entry.description
                    ),
                    "seed_permissions",
                )

            permissions = await _expect(
                repos.permissions.list_all(), "list_permissions"
            )
            await _expect(
                repos.permissions.replace_role_permissions(
                    _id(roles[DefaultRole.ADMIN]),
                    [permission.id for permission in permissions if permission.id],
                ),
                "bind_admin_permissions",
            )
            await _expect(
                repos.permissions.replace_role_permissions(
                    _id(roles[DefaultRole.USER]),
                    [
                        permission.id
                        for permission in permissions
                        if permission.id
                        and (permission.resource, permission.action)
                        in USER_ROLE_PERMISSIONS
                    ],
                ),
                "bind_user_permissions",
            )
            await _expect(synchronizer.sync_all(), "sync_all")

            admin = await self._ensure_admin(repos.users)
            await _expect(
                repos.users.add_role(_id(admin), _id(roles[DefaultRole.ADMIN])),
                "assign_admin_role",
            )
            await _expect(synchronizer.sync_all(), "sync_all")

        self._logger.info(
            "bootstrap_completed",
            roles=len(roles),
            permissions=len(permissions),
            admin_username=self._admin_username,
        )
        return engine

    async def _ensure_admin(self, users: UserRepository) -> User:
        match await users.find_by_username(self._admin_username):
            case Success(value=existing):
                return existing
            case Failure(error=error) if not error.is_not_found:
                raise BootstrapError(f"find_admin failed: {error}")

        admin = User(
            username=self._admin_username,
            password_hash=self._password_service.hash_password(self._admin_password),
            email=self._admin_email,
            nickname=self._admin_username,
        )
        created = await _expect(users.save(admin), "create_admin")
        self._logger.info(
            "bootstrap_admin_created", user_id=created.id, username=created.username
        )
        return created


class RepositoryScope(Protocol):
    async def __aenter__(self) -> Repositories: ...

    async def __aexit__(self, *exc_info: object) -> bool | None: ...


async def _expect(pending: Awaitable[Result[T, DomainError]], step: str) -> T:
    match await pending:
        case Success(value=value):
            return value
        case Failure(error=error):
            raise BootstrapError(f"{step} failed: {error}")
    raise BootstrapError(f"{step} returned no result")


def _id(entity: Role | User) -> int:
    if entity.id is None:
        raise BootstrapError(f"{type(entity).__name__} has no id")
    return entity.id
