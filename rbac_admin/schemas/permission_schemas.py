"""Policy administration request/response schemas.

Endpoints:
    POST   /api/v1/permissions/policy      - Grant (role, path, method)
    DELETE /api/v1/permissions/policy      - Revoke (role, path, method)
    GET    /api/v1/permissions/policies    - List "role,path,method" strings
    PUT    /api/v1/permissions/user-role   - Replace a user's roles
"""

from typing import Literal

from pydantic import BaseModel, Field

PolicyMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]


class PolicyRequest(BaseModel):
    """A single (role, path, method) policy tuple."""

    role: str = Field(..., min_length=1, max_length=50, examples=["user"])
    path: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Path pattern; ``*`` and ``:name`` segments are wildcards",
        examples=["/api/v1/permissions/policies"],
    )
    method: PolicyMethod = Field(..., examples=["GET"])


class UpdateUserRoleRequest(BaseModel):
    """Replace the user's role set with exactly ``roles``."""

    user_id: int = Field(..., ge=1)
    roles: list[str] = Field(..., min_length=1, examples=[["admin"]])


class PolicyListResponse(BaseModel):
    policies: list[str] = Field(..., examples=[["admin,/api/v1/test,GET"]])


class UserRolesResponse(BaseModel):
    user_id: int
    roles: list[str]


class MessageResponse(BaseModel):
    message: str
