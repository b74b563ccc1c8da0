"""Role database model.

``name`` is what the policy engine stores, so it is unique among live
roles. Soft-deleted roles keep their row for history.
"""

from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.infrastructure.persistence.base import BaseMutableModel, SoftDeleteMixin


class Role(SoftDeleteMixin, BaseMutableModel):
    """Role row."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Role name used as the policy subject",
    )

    description: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    __table_args__ = (
        Index(
            "uq_roles_name_live",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name!r})>"
