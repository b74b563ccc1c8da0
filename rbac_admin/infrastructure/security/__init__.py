"""Security adapters: password hashing and access tokens."""

from rbac_admin.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from rbac_admin.infrastructure.security.jwt_service import JWTService

__all__ = ["BcryptPasswordService", "JWTService"]
