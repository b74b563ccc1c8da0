"""User domain entity.

Pure business data, no framework dependencies. The password hash never
leaves the application layer: response schemas omit it and loggers never
receive it.
"""

from dataclasses import dataclass, field
from datetime import datetime

from rbac_admin.domain.enums import UserStatus


@dataclass
class User:
    """Account that authenticates with a username and password.

    Attributes:
        id: Surrogate identifier (None until persisted).
        username: Unique login name; the subject in policy decisions.
        password_hash: Bcrypt hash (never plaintext).
        email: Optional email, unique when present.
        phone: Optional phone number, unique when present.
        nickname: Display name.
        avatar: Avatar URL.
        status: Enabled or disabled.
        roles: Names of the live roles held by the user (loaded on demand).
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
        deleted_at: Soft-deletion timestamp (None while live).
    """

    username: str
    password_hash: str
    id: int | None = None
    email: str | None = None
    phone: str | None = None
    nickname: str = ""
    avatar: str = ""
    status: UserStatus = UserStatus.ENABLED
    roles: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def is_enabled(self) -> bool:
        return self.status == UserStatus.ENABLED

    def is_deleted(self) -> bool:
        return self.deleted_at is not None
