"""Login endpoint (public).

POST /api/v1/user/login -> access token
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from rbac_admin.application.commands import AuthenticateUser
from rbac_admin.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from rbac_admin.core.container import get_authenticate_user_handler
from rbac_admin.core.result import Failure, Success
from rbac_admin.presentation.routers.api.v1.errors import ErrorResponseBuilder
from rbac_admin.schemas.user_schemas import LoginRequest, TokenResponse

router = APIRouter(prefix="/user", tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    request: Request,
    data: LoginRequest,
    handler: AuthenticateUserHandler = Depends(get_authenticate_user_handler),
) -> TokenResponse | JSONResponse:
    """Exchange username and password for a bearer token.

    Returns:
        TokenResponse on success; 401 for unknown users, wrong passwords
        and disabled accounts.
    """
    result = await handler.handle(
        AuthenticateUser(username=data.username, password=data.password)
    )
    match result:
        case Success(value=token):
            return TokenResponse(
                access_token=token.access_token,
                token_type=token.token_type,
                expires_in=token.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)
