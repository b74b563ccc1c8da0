"""Command and query handler factories (request-scoped).

Each factory wires a handler from request-scoped repositories, the
request's synchronizer and the app-scoped services.
"""

from fastapi import Depends

from rbac_admin.application.commands.handlers.authenticate_user_handler import (
    AuthenticateUserHandler,
)
from rbac_admin.application.commands.handlers.policy_handlers import (
    AssignUserRolesHandler,
    GrantPolicyHandler,
    RevokePolicyHandler,
)
from rbac_admin.application.commands.handlers.role_handlers import (
    CreateRoleHandler,
    DeleteRoleHandler,
    UpdateRoleHandler,
)
from rbac_admin.application.commands.handlers.user_handlers import (
    ChangePasswordHandler,
    DeleteUserHandler,
    RegisterUserHandler,
    UpdateUserHandler,
)
from rbac_admin.application.queries.handlers.rbac_query_handlers import (
    GetRoleHandler,
    GetUserHandler,
    ListPoliciesHandler,
    ListRolesHandler,
    ListUsersHandler,
)
from rbac_admin.application.services import PolicySynchronizer
from rbac_admin.core.container.authorization import get_policy_synchronizer
from rbac_admin.core.container.infrastructure import (
    get_logger,
    get_password_service,
    get_policy_engine,
    get_token_service,
)
from rbac_admin.core.container.repositories import (
    get_permission_repository,
    get_role_repository,
    get_user_repository,
)
from rbac_admin.domain.protocols import PolicyEngine
from rbac_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)

# ============================================================================
# Users
# ============================================================================


def get_authenticate_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> AuthenticateUserHandler:
    return AuthenticateUserHandler(
        user_repository=user_repository,
        password_service=get_password_service(),
        token_service=get_token_service(),
        logger=get_logger(),
    )


def get_register_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    role_repository: RoleRepository = Depends(get_role_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> RegisterUserHandler:
    """Get RegisterUser handler: account insert plus default role attach."""
    return RegisterUserHandler(
        user_repository=user_repository,
        role_repository=role_repository,
        password_service=get_password_service(),
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_update_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> UpdateUserHandler:
    return UpdateUserHandler(user_repository=user_repository, logger=get_logger())


def get_delete_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> DeleteUserHandler:
    return DeleteUserHandler(
        user_repository=user_repository,
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_change_password_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> ChangePasswordHandler:
    return ChangePasswordHandler(
        user_repository=user_repository,
        password_service=get_password_service(),
        logger=get_logger(),
    )


def get_get_user_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> GetUserHandler:
    return GetUserHandler(user_repository=user_repository)


def get_list_users_handler(
    user_repository: UserRepository = Depends(get_user_repository),
) -> ListUsersHandler:
    return ListUsersHandler(user_repository=user_repository)


# ============================================================================
# Roles
# ============================================================================


def get_create_role_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
) -> CreateRoleHandler:
    return CreateRoleHandler(role_repository=role_repository, logger=get_logger())


def get_update_role_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> UpdateRoleHandler:
    return UpdateRoleHandler(
        role_repository=role_repository,
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_delete_role_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> DeleteRoleHandler:
    return DeleteRoleHandler(
        role_repository=role_repository,
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_get_role_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
) -> GetRoleHandler:
    return GetRoleHandler(role_repository=role_repository)


def get_list_roles_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
) -> ListRolesHandler:
    return ListRolesHandler(role_repository=role_repository)


# ============================================================================
# Policies
# ============================================================================


def get_grant_policy_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> GrantPolicyHandler:
    return GrantPolicyHandler(
        role_repository=role_repository,
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_revoke_policy_handler(
    role_repository: RoleRepository = Depends(get_role_repository),
    permission_repository: PermissionRepository = Depends(get_permission_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> RevokePolicyHandler:
    return RevokePolicyHandler(
        role_repository=role_repository,
        permission_repository=permission_repository,
        synchronizer=synchronizer,
        logger=get_logger(),
    )


def get_assign_user_roles_handler(
    user_repository: UserRepository = Depends(get_user_repository),
    role_repository: RoleRepository = Depends(get_role_repository),
    synchronizer: PolicySynchronizer = Depends(get_policy_synchronizer),
) -> AssignUserRolesHandler:
    return AssignUserRolesHandler(
        user_repository=user_repository,
        role_repository=role_repository,
        synchronizer=synchronizer,
    )


def get_list_policies_handler(
    engine: PolicyEngine = Depends(get_policy_engine),
) -> ListPoliciesHandler:
    return ListPoliciesHandler(engine=engine)
