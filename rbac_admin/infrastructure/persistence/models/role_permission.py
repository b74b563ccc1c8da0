"""Role-to-permission grant (P in the policy engine)."""

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.infrastructure.persistence.base import AssociationModel


class RolePermission(AssociationModel):
    __tablename__ = "role_permissions"

    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("roles.id"), primary_key=True
    )
    permission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("permissions.id"), primary_key=True
    )

    __table_args__ = (
        Index("idx_role_permissions_permission_id", "permission_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<RolePermission(role_id={self.role_id}, "
            f"permission_id={self.permission_id})>"
        )
