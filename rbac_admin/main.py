"""
Main FastAPI application entry point.

Startup (lifespan):
    1. Open the database.
    2. Run bootstrap: schema, policy engine, default roles and permissions,
       administrator account, full policy sync.
    3. Expose the database and the loaded policy engine on ``app.state``.

Bootstrap failures abort startup; the listener never accepts requests
against an unsynchronized engine.

Run:
    uvicorn rbac_admin.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rbac_admin.application.services import Bootstrapper
from rbac_admin.core.config import Settings, get_settings
from rbac_admin.core.container import get_logger, get_password_service, repository_scope
from rbac_admin.infrastructure.authorization import CasbinPolicyEngine, build_enforcer
from rbac_admin.infrastructure.persistence.database import Database
from rbac_admin.presentation.routers import system_router
from rbac_admin.presentation.routers.api.middleware.trace_middleware import (
    TraceMiddleware,
)
from rbac_admin.presentation.routers.api.v1 import v1_router
from rbac_admin.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: bootstrap on startup, dispose on shutdown."""
    settings: Settings = app.state.settings
    logger = get_logger()
    database = Database(database_url=settings.database_url, echo=settings.db_echo)

    bootstrapper = Bootstrapper(
        create_schema=database.create_all,
        engine_factory=lambda: CasbinPolicyEngine(
            build_enforcer(settings.casbin_model_path, database.engine), logger
        ),
        open_repositories=lambda: repository_scope(database),
        password_service=get_password_service(),
        logger=logger,
        admin_username=settings.admin_username,
        admin_password=settings.admin_password,
        admin_email=settings.admin_email,
    )
    try:
        app.state.policy_engine = await bootstrapper.run()
    except Exception as e:
        logger.critical("bootstrap_failed", error=e)
        await database.close()
        raise
    app.state.database = database
    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    await database.close()
    logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Overrides the cached settings (tests use a per-test
            database URL).
    """
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="User accounts and role-based access control",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORS and runs first
    app.add_middleware(TraceMiddleware)

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(v1_router)
    return app


app = create_app()
