"""Infrastructure dependency factories.

Application-scoped singletons (cached with ``lru_cache``):
- Logging (structlog console adapter)
- Password hashing (bcrypt)
- Token generation (JWT)

Lifespan-scoped objects created at startup and stored on ``app.state``:
- Database (engine and session factory)
- Policy engine (loaded by bootstrap)

Request-scoped:
- Database session
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.core.config import get_settings
from rbac_admin.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from rbac_admin.domain.protocols import (
        LoggerProtocol,
        PasswordHashingProtocol,
        PolicyEngine,
        TokenServiceProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    Development renders human-readable console output; every other
    environment emits JSON lines.

    Usage:
        logger = get_logger()
        logger.info("role_created", role_id=role.id)
    """
    from rbac_admin.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped)."""
    from rbac_admin.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_service() -> "TokenServiceProtocol":
    """Get JWT token service singleton (app-scoped).

    Uses the configured secret key, algorithm and token lifetime.
    """
    from rbac_admin.infrastructure.security import JWTService

    settings = get_settings()
    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )


# ============================================================================
# Lifespan-Scoped Dependencies (created at startup)
# ============================================================================


def get_database(request: Request) -> Database:
    """Database created by the application lifespan."""
    return request.app.state.database


def get_policy_engine(request: Request) -> "PolicyEngine":
    """Policy engine loaded by bootstrap.

    Raises:
        RuntimeError: If called before startup finished.
    """
    engine = getattr(request.app.state, "policy_engine", None)
    if engine is None:
        raise RuntimeError("Policy engine not initialized. Bootstrap must run at startup.")
    return engine


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    One session per request, shared by every repository the request
    builds. Committed on success and rolled back on error.

    Usage:
        @router.get("/roles/")
        async def list_roles(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with database.get_session() as session:
        yield session
