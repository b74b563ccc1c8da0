"""RoleRepository - SQLAlchemy implementation of the RoleRepository protocol."""

from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import Role
from rbac_admin.domain.errors import StorageError
from rbac_admin.infrastructure.persistence.errors import not_found, storage_error_from
from rbac_admin.infrastructure.persistence.models import (
    Role as RoleModel,
    RolePermission as RolePermissionModel,
    UserRole as UserRoleModel,
)
from rbac_admin.infrastructure.persistence.repositories.orphans import (
    delete_orphan_permissions,
)


class RoleRepository:
    """SQLAlchemy implementation of RoleRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, role_id: int) -> Result[Role, StorageError]:
        return await self._find_one(RoleModel.id == role_id, identifier=str(role_id))

    async def find_by_name(self, name: str) -> Result[Role, StorageError]:
        return await self._find_one(RoleModel.name == name, identifier=name)

    async def find_by_names(self, names: list[str]) -> Result[list[Role], StorageError]:
        if not names:
            return Success(value=[])
        try:
            rows = await self.session.scalars(
                select(RoleModel).where(
                    RoleModel.name.in_(set(names)), RoleModel.deleted_at.is_(None)
                )
            )
            roles = [self._to_domain(row) for row in rows.all()]
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=roles)

    async def list_all(self) -> Result[list[Role], StorageError]:
        try:
            rows = await self.session.scalars(
                select(RoleModel)
                .where(RoleModel.deleted_at.is_(None))
                .order_by(RoleModel.id)
            )
            roles = [self._to_domain(row) for row in rows.all()]
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=roles)

    async def save(self, role: Role) -> Result[Role, StorageError]:
        role_model = RoleModel(name=role.name, description=role.description)
        try:
            self.session.add(role_model)
            await self.session.commit()
            await self.session.refresh(role_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(role_model))

    async def update(self, role: Role) -> Result[Role, StorageError]:
        try:
            role_model = await self._live_model(role.id)
            if role_model is None:
                return Failure(error=not_found("Role", str(role.id)))
            role_model.name = role.name
            role_model.description = role.description
            await self.session.commit()
            await self.session.refresh(role_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(role_model))

    async def upsert(self, name: str, description: str) -> Result[Role, StorageError]:
        try:
            role_model = await self.session.scalar(
                select(RoleModel).where(
                    RoleModel.name == name, RoleModel.deleted_at.is_(None)
                )
            )
            if role_model is None:
                role_model = RoleModel(name=name, description=description)
                self.session.add(role_model)
            elif role_model.description != description:
                role_model.description = description
            else:
                return Success(value=self._to_domain(role_model))
            await self.session.commit()
            await self.session.refresh(role_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(role_model))

    async def delete(self, role_id: int) -> Result[None, StorageError]:
        """Delete a role and everything that hangs off it.

        In one transaction: drop memberships, drop grants, delete
        permissions those grants leave orphaned, soft-delete the role.
        """
        try:
            role_model = await self._live_model(role_id)
            if role_model is None:
                return Failure(error=not_found("Role", str(role_id)))

            granted = await self.session.scalars(
                select(RolePermissionModel.permission_id).where(
                    RolePermissionModel.role_id == role_id
                )
            )
            permission_ids = list(granted.all())

            await self.session.execute(
                delete(UserRoleModel).where(UserRoleModel.role_id == role_id)
            )
            await self.session.execute(
                delete(RolePermissionModel).where(RolePermissionModel.role_id == role_id)
            )
            await delete_orphan_permissions(self.session, permission_ids)
            role_model.deleted_at = datetime.now(UTC)
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=None)

    async def _live_model(self, role_id: int | None) -> RoleModel | None:
        return await self.session.scalar(
            select(RoleModel).where(RoleModel.id == role_id, RoleModel.deleted_at.is_(None))
        )

    async def _find_one(self, criterion, *, identifier: str) -> Result[Role, StorageError]:
        try:
            role_model = await self.session.scalar(
                select(RoleModel).where(criterion, RoleModel.deleted_at.is_(None))
            )
        except SQLAlchemyError as e:
            return await self._fail(e)
        if role_model is None:
            return Failure(error=not_found("Role", identifier))
        return Success(value=self._to_domain(role_model))

    async def _fail(self, error: SQLAlchemyError) -> Failure[StorageError]:
        await self.session.rollback()
        return Failure(error=storage_error_from(error, resource_type="Role"))

    def _to_domain(self, role_model: RoleModel) -> Role:
        return Role(
            id=role_model.id,
            name=role_model.name,
            description=role_model.description,
            created_at=role_model.created_at,
            updated_at=role_model.updated_at,
            deleted_at=role_model.deleted_at,
        )
