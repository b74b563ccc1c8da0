"""JWT authentication dependencies.

Extracts and validates the bearer token and exposes the caller's identity.
Authorization (whether the caller may reach the route) is a separate step,
see ``authorization_dependencies``.

Usage:
    @router.get("/me")
    async def me(current_user: CurrentUser = Depends(get_current_user)):
        return {"username": current_user.username}
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from rbac_admin.core.container import get_token_service
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.protocols import TokenServiceProtocol

# auto_error=False so a missing header is reported as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated user information from JWT.

    Attributes:
        user_id: User's identifier (from JWT 'sub' claim).
        username: Login name (from JWT 'username' claim); the policy subject.
        token_jti: JWT unique identifier.
    """

    user_id: int
    username: str
    token_jti: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    token_service: Annotated[TokenServiceProtocol, Depends(get_token_service)],
) -> CurrentUser:
    """Get current authenticated user from JWT token.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    match token_service.validate_access_token(credentials.credentials):
        case Success(value=payload):
            try:
                jti_raw = payload.get("jti")
                return CurrentUser(
                    user_id=int(payload["sub"]),
                    username=str(payload["username"]),
                    token_jti=str(jti_raw) if jti_raw else None,
                )
            except (KeyError, ValueError) as e:
                raise _unauthorized("Invalid token payload") from e
        case Failure(error=error):
            raise _unauthorized(error.message)
    raise _unauthorized("Invalid token")
