"""Example protected endpoint, reachable by roles granted GET /api/v1/test."""

from fastapi import APIRouter, Depends

from rbac_admin.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
)
from rbac_admin.presentation.routers.api.middleware.authorization_dependencies import (
    require_access,
)

router = APIRouter(tags=["Examples"])


@router.get("/test")
async def test_endpoint(
    current_user: CurrentUser = Depends(require_access),
) -> dict[str, str]:
    return {"message": "access granted", "username": current_user.username}
