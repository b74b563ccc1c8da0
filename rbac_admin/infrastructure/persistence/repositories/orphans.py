"""Garbage collection of permissions that no role refers to."""

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.infrastructure.persistence.models import (
    Permission as PermissionModel,
    RolePermission as RolePermissionModel,
)


async def delete_orphan_permissions(
    session: AsyncSession, permission_ids: list[int]
) -> int:
    """Delete the given permissions that have no remaining grant.

    Runs inside the caller's transaction and does not commit.

    Returns:
        Number of permission rows deleted.
    """
    if not permission_ids:
        return 0
    referenced = exists(
        select(RolePermissionModel.permission_id).where(
            RolePermissionModel.permission_id == PermissionModel.id
        )
    )
    result = await session.execute(
        delete(PermissionModel)
        .where(PermissionModel.id.in_(permission_ids), ~referenced)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0
