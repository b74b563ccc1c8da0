"""Integration tests for startup seeding."""

import pytest

from rbac_admin.application.services import Bootstrapper
from rbac_admin.application.services.permission_catalogue import PERMISSION_CATALOGUE
from rbac_admin.core.config import DEFAULT_MODEL_PATH
from rbac_admin.core.container.repositories import repository_scope
from rbac_admin.core.result import Success
from rbac_admin.domain.value_objects import GroupingRule
from rbac_admin.infrastructure.authorization import (
    CasbinPolicyEngine,
    PolicyModelNotFoundError,
    build_enforcer,
)
from rbac_admin.infrastructure.security import BcryptPasswordService


def _bootstrapper(database, logger, model_path=DEFAULT_MODEL_PATH) -> Bootstrapper:
    return Bootstrapper(
        create_schema=database.create_all,
        engine_factory=lambda: CasbinPolicyEngine(
            build_enforcer(model_path, database.engine), logger
        ),
        open_repositories=lambda: repository_scope(database),
        password_service=BcryptPasswordService(cost_factor=10),
        logger=logger,
    )


@pytest.mark.integration
class TestBootstrap:
    async def test_fresh_store(self, test_database, mock_logger):
        engine = await _bootstrapper(test_database, mock_logger).run()

        assert engine.enforce("admin", "/api/v1/test", "GET") == Success(value=True)
        assert engine.enforce("user", "/api/v1/permissions/policies", "GET") == Success(
            value=False
        )
        assert engine.enforce("user", "/api/v1/users/3", "GET") == Success(value=True)
        assert GroupingRule("admin", "admin") in engine.get_groupings()
        admin_policies = [rule for rule in engine.get_policies() if rule.role == "admin"]
        assert len(admin_policies) == len(PERMISSION_CATALOGUE)

    async def test_admin_account_can_log_in(self, test_database, mock_logger):
        await _bootstrapper(test_database, mock_logger).run()

        async with repository_scope(test_database) as repos:
            admin = (await repos.users.find_by_username("admin", with_roles=True)).value

        assert admin.roles == ["admin"]
        assert BcryptPasswordService(cost_factor=10).verify_password(
            "123456", admin.password_hash
        )

    async def test_rerun_is_idempotent(self, test_database, mock_logger):
        first = await _bootstrapper(test_database, mock_logger).run()
        second = await _bootstrapper(test_database, mock_logger).run()

        assert set(first.get_policies()) == set(second.get_policies())
        assert set(first.get_groupings()) == set(second.get_groupings())
        async with repository_scope(test_database) as repos:
            roles = (await repos.roles.list_all()).value
            permissions = (await repos.permissions.list_all()).value
        assert [role.name for role in roles] == ["admin", "user"]
        assert len(permissions) == len(PERMISSION_CATALOGUE)

    async def test_missing_model_file_aborts(self, test_database, mock_logger, tmp_path):
        bootstrapper = _bootstrapper(
            test_database, mock_logger, model_path=tmp_path / "absent.conf"
        )

        with pytest.raises(PolicyModelNotFoundError):
            await bootstrapper.run()
