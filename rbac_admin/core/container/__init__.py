"""Container module - centralized dependency injection.

Re-exports every factory so callers import from one place:

    from rbac_admin.core.container import get_logger, get_user_repository

Organized by concern:
- infrastructure: logging, security services, database, policy engine
- repositories: repository factories and the bootstrap repository scope
- authorization: policy synchronizer and authorization gate
- handler_factory: command and query handlers
"""

from rbac_admin.core.container.authorization import (
    get_authorization_gate,
    get_policy_synchronizer,
)
from rbac_admin.core.container.handler_factory import (
    get_assign_user_roles_handler,
    get_authenticate_user_handler,
    get_change_password_handler,
    get_create_role_handler,
    get_delete_role_handler,
    get_delete_user_handler,
    get_get_role_handler,
    get_get_user_handler,
    get_grant_policy_handler,
    get_list_policies_handler,
    get_list_roles_handler,
    get_list_users_handler,
    get_register_user_handler,
    get_revoke_policy_handler,
    get_update_role_handler,
    get_update_user_handler,
)
from rbac_admin.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_policy_engine,
    get_token_service,
)
from rbac_admin.core.container.repositories import (
    RepositoryBundle,
    get_permission_repository,
    get_role_repository,
    get_user_repository,
    repository_scope,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_policy_engine",
    "get_token_service",
    # Repositories
    "RepositoryBundle",
    "get_permission_repository",
    "get_role_repository",
    "get_user_repository",
    "repository_scope",
    # Authorization
    "get_authorization_gate",
    "get_policy_synchronizer",
    # Handlers
    "get_assign_user_roles_handler",
    "get_authenticate_user_handler",
    "get_change_password_handler",
    "get_create_role_handler",
    "get_delete_role_handler",
    "get_delete_user_handler",
    "get_get_role_handler",
    "get_get_user_handler",
    "get_grant_policy_handler",
    "get_list_policies_handler",
    "get_list_roles_handler",
    "get_list_users_handler",
    "get_register_user_handler",
    "get_revoke_policy_handler",
    "get_update_role_handler",
    "get_update_user_handler",
]
