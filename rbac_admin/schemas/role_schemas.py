"""Role request/response schemas."""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field

from rbac_admin.domain.entities import Role


class RoleCreateRequest(BaseModel):
    """POST /api/v1/roles/"""

    name: str = Field(..., min_length=2, max_length=50, examples=["auditor"])
    description: str = Field(default="", max_length=255)


class RoleUpdateRequest(BaseModel):
    """PUT /api/v1/roles/ (the id travels in the body)."""

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=2, max_length=50)
    description: str = Field(default="", max_length=255)


class RoleResponse(BaseModel):
    id: int
    name: str
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, role: Role) -> Self:
        return cls(
            id=role.id or 0,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )
