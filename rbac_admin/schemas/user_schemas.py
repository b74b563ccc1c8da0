"""User and login request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities; responses never carry the password
hash.

Endpoints:
    POST   /api/v1/user/login              - Issue access token
    POST   /api/v1/users/register          - Create user
    GET    /api/v1/users/                  - List users (paginated)
    GET    /api/v1/users/{id}              - Get user
    PUT    /api/v1/users/{id}              - Update profile
    DELETE /api/v1/users/{id}              - Soft-delete user
    PUT    /api/v1/users/{id}/password     - Change password
"""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from rbac_admin.domain.entities import User
from rbac_admin.domain.enums import UserStatus
from rbac_admin.domain.value_objects import Page

# =============================================================================
# Login
# =============================================================================


class LoginRequest(BaseModel):
    """POST /api/v1/user/login"""

    username: str = Field(..., min_length=1, max_length=50, examples=["admin"])
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Seconds until expiration")


# =============================================================================
# Registration and profile
# =============================================================================


class UserRegisterRequest(BaseModel):
    """Request schema for user creation.

    POST /api/v1/users/register
    Returns: 201 Created
    """

    username: str = Field(..., min_length=3, max_length=50, examples=["alice"])
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (at least 6 characters)",
    )
    email: EmailStr | None = Field(default=None, examples=["alice@example.com"])
    phone: str | None = Field(default=None, max_length=20)
    nickname: str = Field(default="", max_length=50)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "secret123",
                "email": "alice@example.com",
            }
        }
    )


class UserUpdateRequest(BaseModel):
    """PUT /api/v1/users/{id}. Omitted fields are left unchanged."""

    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    nickname: str | None = Field(default=None, max_length=50)
    avatar: str | None = Field(default=None, max_length=255)
    status: UserStatus | None = Field(
        default=None, description="1 = enabled, 0 = disabled"
    )


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class UserResponse(BaseModel):
    """User resource (no credentials)."""

    id: int
    username: str
    email: str | None = None
    phone: str | None = None
    nickname: str = ""
    avatar: str = ""
    status: int
    roles: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> Self:
        return cls(
            id=user.id or 0,
            username=user.username,
            email=user.email,
            phone=user.phone,
            nickname=user.nickname,
            avatar=user.avatar,
            status=int(user.status),
            roles=list(user.roles),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserListResponse(BaseModel):
    items: list[UserResponse]
    total: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page: Page[User]) -> Self:
        return cls(
            items=[UserResponse.from_entity(user) for user in page.items],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
        )
