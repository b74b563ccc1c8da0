"""Route authorization dependency.

``require_access`` is attached to every protected router. It builds a
RequestContext from the verified token and the raw request path and
method, asks the AuthorizationGate, and maps the decision onto HTTP:

    UNAUTHENTICATED         -> 401
    FORBIDDEN, ENGINE_ERROR -> 403
    STORAGE_ERROR           -> 500

Usage:
    router = APIRouter(dependencies=[Depends(require_access)])
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from rbac_admin.application.services import AuthorizationGate
from rbac_admin.core.container import get_authorization_gate
from rbac_admin.domain.value_objects import DenyReason, RequestContext
from rbac_admin.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)

_DENY_STATUS = {
    DenyReason.UNAUTHENTICATED: (status.HTTP_401_UNAUTHORIZED, "Not authenticated"),
    DenyReason.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Permission denied"),
    DenyReason.ENGINE_ERROR: (status.HTTP_403_FORBIDDEN, "Permission check failed"),
    DenyReason.STORAGE_ERROR: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Unable to load user roles",
    ),
}


async def require_access(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
) -> CurrentUser:
    """Allow the request only if one of the caller's roles grants it.

    Raises:
        HTTPException: 401, 403 or 500 as mapped above.
    """
    decision = await gate.check(
        RequestContext(
            username=current_user.username,
            path=request.url.path,
            method=request.method,
        )
    )
    if decision.allowed:
        return current_user

    status_code, detail = _DENY_STATUS[decision.reason]  # type: ignore[index]
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    raise HTTPException(status_code=status_code, detail=detail, headers=headers)
