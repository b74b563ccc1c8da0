"""User database model.

Security:
    - password_hash: bcrypt hash, never plaintext
Uniqueness:
    - username, email and phone are unique among live rows only (partial
      indexes); email and phone may be NULL on any number of rows
"""

from sqlalchemy import Index, SmallInteger, String, text
from sqlalchemy.orm import Mapped, mapped_column

from rbac_admin.infrastructure.persistence.base import BaseMutableModel, SoftDeleteMixin

_LIVE = "deleted_at IS NULL"


class User(SoftDeleteMixin, BaseMutableModel):
    """Account row.

    Fields:
        id, created_at, updated_at: from BaseMutableModel
        deleted_at: soft-deletion timestamp (SoftDeleteMixin)
        username: login name, unique among live users
        password_hash: bcrypt hash
        email, phone: optional contact details, unique when present
        nickname, avatar: display fields
        status: 1 enabled, 0 disabled
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Login name (unique among live users)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    email: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Email address (unique when present)",
    )

    phone: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Phone number (unique when present)",
    )

    nickname: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    avatar: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    status: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        default=1,
        comment="Account status: 1 enabled, 0 disabled",
    )

    __table_args__ = (
        Index(
            "uq_users_username_live",
            "username",
            unique=True,
            postgresql_where=text(_LIVE),
            sqlite_where=text(_LIVE),
        ),
        Index(
            "uq_users_email_live",
            "email",
            unique=True,
            postgresql_where=text(f"{_LIVE} AND email IS NOT NULL"),
            sqlite_where=text(f"{_LIVE} AND email IS NOT NULL"),
        ),
        Index(
            "uq_users_phone_live",
            "phone",
            unique=True,
            postgresql_where=text(f"{_LIVE} AND phone IS NOT NULL"),
            sqlite_where=text(f"{_LIVE} AND phone IS NOT NULL"),
        ),
        Index("idx_users_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, status={self.status})>"
