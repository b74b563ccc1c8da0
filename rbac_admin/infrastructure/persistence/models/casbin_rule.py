"""Casbin rule model: the policy engine's checkpoint table.

``PolicyEngine.save()`` replaces the contents of this table with the
engine's current P and G. Loading never reads it back; the engine is
always rebuilt from the role/permission tables.

Policy Types (ptype):
    - 'p': v0=role, v1=resource, v2=action
    - 'g': v0=username, v1=role
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.infrastructure.persistence.base import Base


class CasbinRule(Base):
    """One persisted policy line."""

    __tablename__ = "casbin_rule"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    ptype: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Policy type: 'p' (permission) or 'g' (grouping)",
    )

    v0: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v1: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v3: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v4: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v5: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("idx_casbin_rule_ptype", "ptype"),
        Index("idx_casbin_rule_v0_v1_v2", "v0", "v1", "v2"),
    )

    def values(self) -> list[str]:
        """Non-empty policy values in column order."""
        columns = (self.v0, self.v1, self.v2, self.v3, self.v4, self.v5)
        return [value for value in columns if value]

    def __repr__(self) -> str:
        return f"<CasbinRule(ptype={self.ptype}, v0={self.v0}, v1={self.v1}, v2={self.v2})>"
