"""Shared pytest fixtures.

Environment variables are set before any ``rbac_admin`` import because
settings are loaded (and cached) at import time.

Fixtures:
    mock_logger: Mock satisfying LoggerProtocol
    test_database: Fresh in-memory SQLite database with the schema created
    session / repositories: Repositories bound to one session
    policy_engine: Real casbin engine over the test database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("BCRYPT_ROUNDS", "10")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from rbac_admin.core.config import DEFAULT_MODEL_PATH  # noqa: E402
from rbac_admin.core.container.repositories import RepositoryBundle  # noqa: E402
from rbac_admin.infrastructure.authorization import (  # noqa: E402
    CasbinPolicyEngine,
    build_enforcer,
)
from rbac_admin.infrastructure.persistence.database import Database  # noqa: E402
from rbac_admin.infrastructure.persistence.repositories import (  # noqa: E402
    PermissionRepository,
    RoleRepository,
    UserRepository,
)


@pytest.fixture
def mock_logger():
    """Logger mock; assertions inspect ``.info/.warning/.error`` calls."""
    return Mock()


@pytest_asyncio.fixture
async def test_database():
    """Fresh in-memory database per test (StaticPool keeps it alive)."""
    database = Database(database_url="sqlite+aiosqlite://")
    await database.create_all()
    yield database
    await database.close()


@pytest_asyncio.fixture
async def session(test_database):
    async with test_database.get_session() as session:
        yield session


@pytest.fixture
def repositories(session) -> RepositoryBundle:
    return RepositoryBundle(
        users=UserRepository(session=session),
        roles=RoleRepository(session=session),
        permissions=PermissionRepository(session=session),
    )


@pytest.fixture
def policy_engine(test_database, mock_logger) -> CasbinPolicyEngine:
    """Empty casbin engine checkpointing into the test database."""
    return CasbinPolicyEngine(
        build_enforcer(DEFAULT_MODEL_PATH, test_database.engine), mock_logger
    )
