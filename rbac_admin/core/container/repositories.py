"""Repository dependency factories.

Request-scoped repositories share the request's session. ``repository_scope``
opens the same bundle outside a request (bootstrap).
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.container.infrastructure import get_db_session
from rbac_admin.infrastructure.persistence.database import Database
from rbac_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)


def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> UserRepository:
    """Get user repository (request-scoped)."""
    return UserRepository(session=session)


def get_role_repository(
    session: AsyncSession = Depends(get_db_session),
) -> RoleRepository:
    return RoleRepository(session=session)


def get_permission_repository(
    session: AsyncSession = Depends(get_db_session),
) -> PermissionRepository:
    return PermissionRepository(session=session)


@dataclass(frozen=True, slots=True)
class RepositoryBundle:
    """Repositories bound to one session."""

    users: UserRepository
    roles: RoleRepository
    permissions: PermissionRepository


@asynccontextmanager
async def repository_scope(database: Database) -> AsyncIterator[RepositoryBundle]:
    """Open a session and yield repositories bound to it.

    Usage:
        async with repository_scope(database) as repos:
            await repos.roles.list_all()
    """
    async with database.get_session() as session:
        yield RepositoryBundle(
            users=UserRepository(session=session),
            roles=RoleRepository(session=session),
            permissions=PermissionRepository(session=session),
        )
