"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Maps between domain User entities and the ``users`` table, and owns the
``user_roles`` membership rows. Soft-deleted users are invisible to every
query here.
"""

from datetime import UTC, datetime

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.result import Failure, Result, Success
from rbac_admin.domain.entities import User
from rbac_admin.domain.enums import UserStatus
from rbac_admin.domain.errors import StorageError
from rbac_admin.domain.value_objects import GroupingRule, Page
from rbac_admin.infrastructure.persistence.errors import (
    is_unique_violation,
    not_found,
    storage_error_from,
)
from rbac_admin.infrastructure.persistence.models import (
    Role as RoleModel,
    User as UserModel,
    UserRole as UserRoleModel,
)


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Mutating methods commit before returning so that callers can order
    engine updates after durable writes.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     result = await repo.find_by_username("admin", with_roles=True)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(
        self, user_id: int, *, with_roles: bool = False
    ) -> Result[User, StorageError]:
        stmt = select(UserModel).where(
            UserModel.id == user_id, UserModel.deleted_at.is_(None)
        )
        return await self._find_one(stmt, identifier=str(user_id), with_roles=with_roles)

    async def find_by_username(
        self, username: str, *, with_roles: bool = False
    ) -> Result[User, StorageError]:
        stmt = select(UserModel).where(
            UserModel.username == username, UserModel.deleted_at.is_(None)
        )
        return await self._find_one(stmt, identifier=username, with_roles=with_roles)

    async def list_page(
        self, *, page: int, page_size: int
    ) -> Result[Page[User], StorageError]:
        """List live users ordered by id.

        Args:
            page: 1-based page number.
            page_size: Rows per page.
        """
        live = UserModel.deleted_at.is_(None)
        try:
            total = await self.session.scalar(
                select(func.count()).select_from(UserModel).where(live)
            )
            rows = await self.session.scalars(
                select(UserModel)
                .where(live)
                .order_by(UserModel.id)
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            users = [self._to_domain(row) for row in rows.all()]
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(
            value=Page(items=users, total=total or 0, page=page, page_size=page_size)
        )

    async def save(self, user: User) -> Result[User, StorageError]:
        """Insert a new user.

        Empty email/phone strings are stored as NULL so they never collide.
        """
        user_model = self._to_model(user)
        try:
            self.session.add(user_model)
            await self.session.commit()
            await self.session.refresh(user_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(user_model, user.roles))

    async def update(self, user: User) -> Result[User, StorageError]:
        """Persist profile, status and password hash changes of a live user."""
        try:
            user_model = await self.session.scalar(
                select(UserModel).where(
                    UserModel.id == user.id, UserModel.deleted_at.is_(None)
                )
            )
            if user_model is None:
                return Failure(error=not_found("User", str(user.id)))

            user_model.password_hash = user.password_hash
            user_model.email = user.email or None
            user_model.phone = user.phone or None
            user_model.nickname = user.nickname
            user_model.avatar = user.avatar
            user_model.status = int(user.status)

            await self.session.commit()
            await self.session.refresh(user_model)
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(user_model, user.roles))

    async def soft_delete(self, user_id: int) -> Result[None, StorageError]:
        try:
            user_model = await self.session.scalar(
                select(UserModel).where(
                    UserModel.id == user_id, UserModel.deleted_at.is_(None)
                )
            )
            if user_model is None:
                return Failure(error=not_found("User", str(user_id)))

            user_model.deleted_at = datetime.now(UTC)
            await self.session.execute(
                delete(UserRoleModel).where(UserRoleModel.user_id == user_id)
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=None)

    async def assign_roles(
        self, user_id: int, role_ids: list[int]
    ) -> Result[None, StorageError]:
        """Replace the user's memberships with exactly ``role_ids``.

        Delete and insert run in one transaction; duplicates in
        ``role_ids`` collapse.
        """
        try:
            await self.session.execute(
                delete(UserRoleModel).where(UserRoleModel.user_id == user_id)
            )
            for role_id in dict.fromkeys(role_ids):
                self.session.add(UserRoleModel(user_id=user_id, role_id=role_id))
            await self.session.commit()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=None)

    async def add_role(self, user_id: int, role_id: int) -> Result[bool, StorageError]:
        try:
            existing = await self.session.scalar(
                select(UserRoleModel).where(
                    UserRoleModel.user_id == user_id, UserRoleModel.role_id == role_id
                )
            )
            if existing is not None:
                return Success(value=False)
            self.session.add(UserRoleModel(user_id=user_id, role_id=role_id))
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                return Success(value=False)
            return Failure(error=storage_error_from(e, resource_type="UserRole"))
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=True)

    async def list_groupings(self) -> Result[list[GroupingRule], StorageError]:
        stmt = (
            select(UserModel.username, RoleModel.name)
            .join(UserRoleModel, UserRoleModel.user_id == UserModel.id)
            .join(RoleModel, RoleModel.id == UserRoleModel.role_id)
            .where(UserModel.deleted_at.is_(None), RoleModel.deleted_at.is_(None))
            .order_by(UserModel.id, RoleModel.id)
        )
        try:
            rows = (await self.session.execute(stmt)).all()
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=[GroupingRule(username, role) for username, role in rows])

    async def _find_one(
        self, stmt: Select[tuple[UserModel]], *, identifier: str, with_roles: bool
    ) -> Result[User, StorageError]:
        try:
            user_model = await self.session.scalar(stmt)
            if user_model is None:
                return Failure(error=not_found("User", identifier))
            roles = await self._role_names(user_model.id) if with_roles else []
        except SQLAlchemyError as e:
            return await self._fail(e)
        return Success(value=self._to_domain(user_model, roles))

    async def _role_names(self, user_id: int) -> list[str]:
        rows = await self.session.scalars(
            select(RoleModel.name)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .where(UserRoleModel.user_id == user_id, RoleModel.deleted_at.is_(None))
            .order_by(RoleModel.id)
        )
        return list(rows.all())

    async def _fail(self, error: SQLAlchemyError) -> Failure[StorageError]:
        await self.session.rollback()
        return Failure(error=storage_error_from(error, resource_type="User"))

    def _to_domain(self, user_model: UserModel, roles: list[str] | None = None) -> User:
        return User(
            id=user_model.id,
            username=user_model.username,
            password_hash=user_model.password_hash,
            email=user_model.email,
            phone=user_model.phone,
            nickname=user_model.nickname,
            avatar=user_model.avatar,
            status=UserStatus(user_model.status),
            roles=list(roles or []),
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
            deleted_at=user_model.deleted_at,
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            username=user.username,
            password_hash=user.password_hash,
            email=user.email or None,
            phone=user.phone or None,
            nickname=user.nickname,
            avatar=user.avatar,
            status=int(user.status),
        )
