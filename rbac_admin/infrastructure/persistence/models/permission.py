"""Permission database model.

Permissions are hard-deleted once no role refers to them, so the
(resource, action) pair carries a plain unique constraint.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.infrastructure.persistence.base import BaseMutableModel


class Permission(BaseMutableModel):
    """Permission row: a path pattern plus an HTTP method."""

    __tablename__ = "permissions"

    resource: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Path pattern (literal segments, :name, trailing *)",
    )

    action: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Uppercase HTTP method",
    )

    description: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    __table_args__ = (
        UniqueConstraint("resource", "action", name="uq_permissions_resource_action"),
    )

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, {self.action} {self.resource})>"
