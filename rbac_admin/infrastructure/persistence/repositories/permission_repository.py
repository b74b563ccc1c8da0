"""PermissionRepository - SQLAlchemy implementation of PermissionRepository.

Owns ``permissions`` and ``role_permissions``. Grant and revoke are each a
single transaction: the association write and any orphan cleanup commit
together or not at all.
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Permission
from rbac_admin.domain.errors import StorageError
from rbac_admin.domain.value_objects import GrantOutcome, PolicyRule, RevokeOutcome
from rbac_admin.infrastructure.persistence.errors import (
    is_unique_violation,
    not_found,
    storage_error_from,
)
from rbac_admin.infrastructure.persistence.models import (
    Permission as PermissionModel,
    Role as RoleModel,
    RolePermission as RolePermissionModel,
)
from rbac_admin.infrastructure.persistence.repositories.orphans import (
    delete_orphan_permissions,
)


class PermissionRepository:
    """SQLAlchemy implementation of PermissionRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, resource: str, action: str) -> Result[Permission, StorageError]:
        try:
            permission_model = await self._find_model(resource, action)
        except SQLAlchemyError as e:
            return await self._fail(e)
        if permission_model is None:
            return Failure(error=not_found("Permission", f"{action} {resource}"))
        return Success(value=self._to_domain(permission_model))

    async def list_all(self) -> Result[list[Permission], StorageError]:
        try:
            rows = await self.session.scalars(
                select(PermissionModel).order_by(PermissionModel.id)
            )
            permissions = [self._to_domain(row) for row in rows.all()]
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=permissions)

    async def upsert(
        self, resource: str, action: str, description: str
    ) -> Result[Permission, StorageError]:
        try:
            permission_model = await self._find_model(resource, action)
            if permission_model is None:
                permission_model = PermissionModel(
                    resource=resource, action=action, description=description
                )
                self.session.add(permission_model)
            elif permission_model.description != description:
                permission_model.description = description
            else:
                return Success(value=self._to_domain(permission_model))
            await self.session.commit()
            await self.session.refresh(permission_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(permission_model))

    async def grant_pair(
        self, role_id: int, resource: str, action: str, description: str
    ) -> Result[GrantOutcome, StorageError]:
        """Find or create (resource, action) and grant it to the role.

        The permission insert and the association insert commit together,
        so a failed grant never leaves an orphan permission behind.
        """
        try:
            permission_model = await self._find_model(resource, action)
            if permission_model is None:
                permission_model = PermissionModel(
                    resource=resource, action=action, description=description
                )
                self.session.add(permission_model)
                await self.session.flush()
            elif await self._association_exists(role_id, permission_model.id):
                return Success(value=GrantOutcome.ALREADY_EXISTS)

            self.session.add(
                RolePermissionModel(role_id=role_id, permission_id=permission_model.id)
            )
            await self.session.commit()
        except IntegrityError as e:
            return await self._grant_conflict(e)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=GrantOutcome.CREATED)

    async def revoke(
        self, role_id: int, permission_id: int
    ) -> Result[RevokeOutcome, StorageError]:
        try:
            result = await self.session.execute(
                delete(RolePermissionModel)
                .where(
                    RolePermissionModel.role_id == role_id,
                    RolePermissionModel.permission_id == permission_id,
                )
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                await self.session.rollback()
                return Success(value=RevokeOutcome.NOT_FOUND)
            await delete_orphan_permissions(self.session, [permission_id])
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=RevokeOutcome.REMOVED)

    async def replace_role_permissions(
        self, role_id: int, permission_ids: list[int]
    ) -> Result[None, StorageError]:
        """Rebind a role to exactly ``permission_ids``.

        Permissions dropped from the role are not garbage-collected here;
        this is used to rebind catalogue entries that must survive.
        """
        try:
            await self.session.execute(
                delete(RolePermissionModel)
                .where(RolePermissionModel.role_id == role_id)
                .execution_options(synchronize_session=False)
            )
            for permission_id in dict.fromkeys(permission_ids):
                self.session.add(
                    RolePermissionModel(role_id=role_id, permission_id=permission_id)
                )
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=None)

    async def list_policies(self) -> Result[list[PolicyRule], StorageError]:
        stmt = (
            select(RoleModel.name, PermissionModel.resource, PermissionModel.action)
            .join(RolePermissionModel, RolePermissionModel.role_id == RoleModel.id)
            .join(PermissionModel, PermissionModel.id == RolePermissionModel.permission_id)
            .where(RoleModel.deleted_at.is_(None))
            .order_by(RoleModel.id, PermissionModel.id)
        )
        try:
            rows = (await self.session.execute(stmt)).all()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(
            value=[PolicyRule(role, resource, action) for role, resource, action in rows]
        )

    async def _find_model(self, resource: str, action: str) -> PermissionModel | None:
        return await self.session.scalar(
            select(PermissionModel).where(
                PermissionModel.resource == resource, PermissionModel.action == action
            )
        )

    async def _association_exists(self, role_id: int, permission_id: int) -> bool:
        found = await self.session.scalar(
            select(RolePermissionModel.role_id).where(
                RolePermissionModel.role_id == role_id,
                RolePermissionModel.permission_id == permission_id,
            )
        )
        return found is not None

    async def _grant_conflict(
        self, error: IntegrityError
    ) -> Result[GrantOutcome, StorageError]:
        # A concurrent grant won the insert race.
        await self.session.rollback()
        if is_unique_violation(error):
            return Success(value=GrantOutcome.ALREADY_EXISTS)
        return Failure(error=storage_error_from(error, resource_type="RolePermission"))

    async def _fail(self, error: SQLAlchemyError) -> Failure[StorageError]:
        await self.session.rollback()
        return Failure(error=storage_error_from(error, resource_type="Permission"))

    def _to_domain(self, permission_model: PermissionModel) -> Permission:
        return Permission(
            id=permission_model.id,
            resource=permission_model.resource,
            action=permission_model.action,
            description=permission_model.description,
            created_at=permission_model.created_at,
            updated_at=permission_model.updated_at,
        )
