"""Base model and mixins for all database entities.

This module provides:
- Base: declarative root holding the shared metadata
- BaseModel: entity tables (integer id, created_at)
- TimestampMixin: adds updated_at
- SoftDeleteMixin: adds deleted_at; live rows have NULL
- BaseMutableModel: entity tables that can be updated
- AssociationModel: link tables with composite primary keys

Domain entities do NOT inherit from these; repositories map between the
two.

Architecture:
    Base
     ├── BaseModel (id, created_at)
     │    └── BaseMutableModel (+ updated_at)
     │         ├── PermissionModel
     │         ├── RoleModel (+ deleted_at)
     │         └── UserModel (+ deleted_at)
     ├── AssociationModel (created_at, updated_at)
     │    ├── UserRoleModel
     │    └── RolePermissionModel
     └── CasbinRuleModel
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative root; ``Base.metadata`` holds every table."""

    pass


class BaseModel(Base):
    """Base class for entity tables.

    Provides:
    - id: integer primary key, assigned by the database in insert order
    - created_at: timestamp set by the database on INSERT
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Adds updated_at, refreshed by the database on every UPDATE."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class SoftDeleteMixin:
    """Adds deleted_at.

    Every read query must filter on ``deleted_at IS NULL`` and every
    uniqueness constraint on such a table is a partial index over live rows.
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable entity tables (id, created_at, updated_at)."""

    __abstract__ = True


class AssociationModel(TimestampMixin, Base):
    """Base class for link tables; subclasses declare the composite key."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
