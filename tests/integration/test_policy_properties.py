"""Property tests: the engine tracks the store through any admin sequence.

Each generated example starts from a freshly bootstrapped database, applies
a random sequence of grants, revocations, membership changes and role
deletions, and after every step checks that:

- P and G in the engine equal the store projection
- ``enforce`` agrees with ``key_match`` evaluated over that projection,
  following memberships transitively as the ``g`` matcher does
"""

import asyncio
import itertools
from unittest.mock import Mock

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from rbac_admin.application.commands.handlers.role_handlers import DeleteRoleHandler
from rbac_admin.application.commands.role_commands import DeleteRole
from rbac_admin.application.services import Bootstrapper, PolicySynchronizer
from rbac_admin.core.config import DEFAULT_MODEL_PATH
from rbac_admin.core.container.repositories import repository_scope
from rbac_admin.core.result import Failure, Success
from rbac_admin.domain.entities import Role, User
from rbac_admin.infrastructure.authorization import CasbinPolicyEngine, build_enforcer
from rbac_admin.infrastructure.authorization.key_match import key_match
from rbac_admin.infrastructure.persistence.database import Database
from rbac_admin.infrastructure.security import BcryptPasswordService

ROLES = ["admin", "user", "auditor", "ops"]
USERNAMES = ["admin", "alice", "bob"]
PATTERNS = [
    "/api/v1/users/",
    "/api/v1/users/*",
    "/api/v1/users/:id/password",
    "/api/v1/permissions/policies",
    "/api/v1/roles/*",
]
REQUEST_PATHS = [
    "/api/v1/users",
    "/api/v1/users/",
    "/api/v1/users/7",
    "/api/v1/users/7/password",
    "/api/v1/permissions/policies",
    "/api/v1/roles/",
    "/api/v1/roles/3",
]
METHODS = ["GET", "PUT", "POST"]

operations = st.one_of(
    st.tuples(
        st.just("grant"),
        st.sampled_from(ROLES),
        st.sampled_from(PATTERNS),
        st.sampled_from(METHODS),
    ),
    st.tuples(
        st.just("revoke"),
        st.sampled_from(ROLES),
        st.sampled_from(PATTERNS),
        st.sampled_from(METHODS),
    ),
    st.tuples(
        st.just("assign"),
        st.sampled_from(USERNAMES),
        st.lists(st.sampled_from(ROLES), min_size=1, max_size=3, unique=True),
    ),
    st.tuples(st.just("attach"), st.sampled_from(USERNAMES), st.sampled_from(ROLES)),
    st.tuples(st.just("remove_user"), st.sampled_from(USERNAMES)),
    st.tuples(st.just("create_role"), st.sampled_from(ROLES)),
    st.tuples(st.just("delete_role"), st.sampled_from(ROLES)),
    st.tuples(st.just("sync_all")),
)


def _reachable(subject, groupings):
    reached = {subject}
    frontier = [subject]
    while frontier:
        current = frontier.pop()
        for grouping in groupings:
            if grouping.username == current and grouping.role not in reached:
                reached.add(grouping.role)
                frontier.append(grouping.role)
    return reached


def _expected(subject, path, method, policies, groupings):
    roles = _reachable(subject, groupings)
    return any(
        rule.role in roles and rule.action == method and key_match(path, rule.resource)
        for rule in policies
    )


async def _check(engine, repos):
    policies = (await repos.permissions.list_policies()).value
    groupings = (await repos.users.list_groupings()).value

    assert set(engine.get_policies()) == set(policies)
    assert set(engine.get_groupings()) == set(groupings)

    for subject, path, method in itertools.product(
        USERNAMES + ROLES, REQUEST_PATHS, METHODS
    ):
        expected = _expected(subject, path, method, policies, groupings)
        assert engine.enforce(subject, path, method) == Success(value=expected), (
            subject,
            path,
            method,
        )


async def _apply(operation, synchronizer, repos, logger):
    kind, *args = operation
    if kind == "sync_all":
        await synchronizer.sync_all()
        return
    if kind == "create_role":
        await repos.roles.save(Role(name=args[0]))
        return
    if kind == "delete_role":
        match await repos.roles.find_by_name(args[0]):
            case Success(value=role):
                handler = DeleteRoleHandler(
                    role_repository=repos.roles, synchronizer=synchronizer, logger=logger
                )
                await handler.handle(DeleteRole(role_id=role.id))
        return
    if kind in ("grant", "revoke"):
        role_name, resource, method = args
        role = await repos.roles.find_by_name(role_name)
        if isinstance(role, Failure):
            return
        if kind == "grant":
            await synchronizer.grant(role.value, resource, method)
            return
        permission = await repos.permissions.find(resource, method)
        if isinstance(permission, Success):
            await synchronizer.revoke(role.value, permission.value.id, resource, method)
        return

    user = await repos.users.find_by_username(args[0], with_roles=True)
    if isinstance(user, Failure):
        return
    if kind == "remove_user":
        await synchronizer.remove_user(user.value)
    elif kind == "attach":
        role = await repos.roles.find_by_name(args[1])
        if isinstance(role, Success):
            await synchronizer.attach_role(user.value, role.value)
    elif kind == "assign":
        found = await repos.roles.find_by_names(args[1])
        if isinstance(found, Success) and found.value:
            await synchronizer.assign_roles(user.value, found.value)


async def _run_sequence(sequence):
    logger = Mock()
    database = Database(database_url="sqlite+aiosqlite://")
    try:
        engine = await Bootstrapper(
            create_schema=database.create_all,
            engine_factory=lambda: CasbinPolicyEngine(
                build_enforcer(DEFAULT_MODEL_PATH, database.engine), logger
            ),
            open_repositories=lambda: repository_scope(database),
            password_service=BcryptPasswordService(cost_factor=10),
            logger=logger,
        ).run()

        async with repository_scope(database) as repos:
            await repos.roles.save(Role(name="auditor"))
            for username in USERNAMES[1:]:
                await repos.users.save(User(username=username, password_hash="hash"))
            synchronizer = PolicySynchronizer(
                engine=engine,
                user_repository=repos.users,
                permission_repository=repos.permissions,
                logger=logger,
            )
            await _check(engine, repos)

            for operation in sequence:
                await _apply(operation, synchronizer, repos, logger)
                await _check(engine, repos)
    finally:
        await database.close()


@pytest.mark.integration
@settings(
    max_examples=25,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
@given(sequence=st.lists(operations, max_size=12))
def test_engine_matches_store_after_every_operation(sequence):
    asyncio.run(_run_sequence(sequence))
