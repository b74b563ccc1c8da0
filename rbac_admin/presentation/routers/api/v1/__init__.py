"""API v1 routers.

Resources:
    /api/v1/user/login          - Login (public)
    /api/v1/users               - User management
    /api/v1/roles               - Role management
    /api/v1/permissions         - Grants and role assignment
    /api/v1/test                - Example protected endpoint

Every resource except login sits behind ``require_access``.
"""

from fastapi import APIRouter

from rbac_admin.core.config import get_settings
from rbac_admin.presentation.routers.api.v1 import (
    examples,
    permissions,
    roles,
    sessions,
    users,
)

v1_router = APIRouter(prefix=get_settings().api_v1_prefix)
v1_router.include_router(sessions.router)
v1_router.include_router(users.router)
v1_router.include_router(roles.router)
v1_router.include_router(permissions.router)
v1_router.include_router(examples.router)

__all__ = ["v1_router"]
