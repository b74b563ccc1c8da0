"""JWT token service (adapter).

Implements TokenServiceProtocol with PyJWT.

Claims:
    sub: user id (string)
    username: login name; the authorization gate's subject
    iat, exp: issue and expiry timestamps
    jti: unique token id (UUIDv7)
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from rbac_admin.core.enums import ErrorCode
from rbac_admin.core.errors import AuthenticationError
from rbac_admin.core.result import Failure, Result, Success


class JWTService:
    """JWT token generation and validation service.

    Usage:
        service = JWTService(secret_key=settings.secret_key)
        token = service.generate_access_token(user_id=1, username="admin")
        match service.validate_access_token(token):
            case Success(value=claims):
                claims["username"]
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 60,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC signing key, at least 32 characters.
            expiration_minutes: Token lifetime.
            algorithm: HMAC algorithm name.

        Raises:
            ValueError: If secret_key is too short.
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)
        self._secret_key = secret_key
        self.expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    def generate_access_token(self, *, user_id: int, username: str) -> str:
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self.expiration_minutes)
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate signature and expiry, returning the claims.

        Tokens without a ``username`` claim are rejected.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except ExpiredSignatureError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED, message="Token has expired"
                )
            )
        except InvalidTokenError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID, message="Invalid token"
                )
            )
        if not payload.get("username"):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID, message="Token carries no username"
                )
            )
        return Success(value=payload)
