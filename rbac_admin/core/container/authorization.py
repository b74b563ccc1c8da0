"""Authorization dependency factories.

The policy engine itself is app-scoped (built and loaded by bootstrap);
the synchronizer and gate are request-scoped because they hold
session-bound repositories.
"""

from fastapi import Depends

from rbac_admin.application.services import AuthorizationGate, PolicySynchronizer
from rbac_admin.core.container.infrastructure import get_logger, get_policy_engine
from rbac_admin.core.container.repositories import (
    get_permission_repository,
    get_user_repository,
)
from rbac_admin.domain.protocols import PolicyEngine
from rbac_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    UserRepository,
)


def get_policy_synchronizer(
    engine: PolicyEngine = Depends(get_policy_engine),
    user_repository: UserRepository = Depends(get_user_repository),
    permission_repository: PermissionRepository = Depends(get_permission_repository),
) -> PolicySynchronizer:
    """Get policy synchronizer (request-scoped)."""
    return PolicySynchronizer(
        engine=engine,
        user_repository=user_repository,
        permission_repository=permission_repository,
        logger=get_logger(),
    )


def get_authorization_gate(
    engine: PolicyEngine = Depends(get_policy_engine),
    user_repository: UserRepository = Depends(get_user_repository),
) -> AuthorizationGate:
    """Get authorization gate (request-scoped).

    Usage:
        gate: AuthorizationGate = Depends(get_authorization_gate)
        decision = await gate.check(context)
    """
    return AuthorizationGate(
        engine=engine,
        user_repository=user_repository,
        logger=get_logger(),
    )
