"""User account commands (CQRS write operations)."""

from dataclasses import dataclass

from rbac_admin.domain.enums import UserStatus


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Create an account holding the default ``user`` role.

    Attributes:
        username: Login name (unique among live accounts).
        password: Plaintext password, hashed before storage.
        email, phone: Optional, unique when present.
        nickname: Display name.
    """

    username: str
    password: str
    email: str | None = None
    phone: str | None = None
    nickname: str = ""


@dataclass(frozen=True, kw_only=True)
class UpdateUser:
    """Change profile fields; None leaves a field untouched."""

    user_id: int
    email: str | None = None
    phone: str | None = None
    nickname: str | None = None
    avatar: str | None = None
    status: UserStatus | None = None


@dataclass(frozen=True, kw_only=True)
class DeleteUser:
    user_id: int


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Replace a password after verifying the current one."""

    user_id: int
    old_password: str
    new_password: str


@dataclass(frozen=True, kw_only=True)
class AuthenticateUser:
    """Verify credentials and issue an access token."""

    username: str
    password: str
