"""Policy administration endpoints (JWT + authorization gate).

Handlers:
    grant_policy        POST   /permissions/policy
    revoke_policy       DELETE /permissions/policy
    list_policies       GET    /permissions/policies
    update_user_roles   PUT    /permissions/user-role
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from rbac_admin.application.commands import (
    AssignUserRoles,
    GrantPolicy,
    RevokePolicy,
)
from rbac_admin.application.commands.handlers.policy_handlers import (
    AssignUserRolesHandler,
    GrantPolicyHandler,
    RevokePolicyHandler,
)
from rbac_admin.application.queries import ListPolicies
from rbac_admin.application.queries.handlers.rbac_query_handlers import (
    ListPoliciesHandler,
)
from rbac_admin.core.container import (
    get_assign_user_roles_handler,
    get_grant_policy_handler,
    get_list_policies_handler,
    get_revoke_policy_handler,
)
from rbac_admin.core.result import Failure, Success
from rbac_admin.presentation.routers.api.middleware.authorization_dependencies import (
    require_access,
)
from rbac_admin.presentation.routers.api.v1.errors import ErrorResponseBuilder
from rbac_admin.schemas.permission_schemas import (
    MessageResponse,
    PolicyListResponse,
    PolicyRequest,
    UpdateUserRoleRequest,
    UserRolesResponse,
)

router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
    dependencies=[Depends(require_access)],
)


@router.post(
    "/policy",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def grant_policy(
    request: Request,
    data: PolicyRequest,
    handler: GrantPolicyHandler = Depends(get_grant_policy_handler),
) -> MessageResponse | JSONResponse:
    """Grant (role, path, method). An existing grant -> 400."""
    result = await handler.handle(
        GrantPolicy(role=data.role, path=data.path, method=data.method)
    )
    match result:
        case Success(value=rule):
            return MessageResponse(message=f"Policy added: {rule}")
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.delete("/policy", response_model=MessageResponse)
async def revoke_policy(
    request: Request,
    data: PolicyRequest,
    handler: RevokePolicyHandler = Depends(get_revoke_policy_handler),
) -> MessageResponse | JSONResponse:
    """Revoke (role, path, method); the permission goes when orphaned."""
    result = await handler.handle(
        RevokePolicy(role=data.role, path=data.path, method=data.method)
    )
    match result:
        case Success(value=rule):
            return MessageResponse(message=f"Policy removed: {rule}")
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.get("/policies", response_model=PolicyListResponse)
async def list_policies(
    request: Request,
    handler: ListPoliciesHandler = Depends(get_list_policies_handler),
) -> PolicyListResponse | JSONResponse:
    match await handler.handle(ListPolicies()):
        case Success(value=rules):
            return PolicyListResponse(policies=[str(rule) for rule in rules])
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.put("/user-role", response_model=UserRolesResponse)
async def update_user_roles(
    request: Request,
    data: UpdateUserRoleRequest,
    handler: AssignUserRolesHandler = Depends(get_assign_user_roles_handler),
) -> UserRolesResponse | JSONResponse:
    """Replace the user's roles with exactly ``roles``."""
    result = await handler.handle(AssignUserRoles(user_id=data.user_id, roles=data.roles))
    match result:
        case Success(value=roles):
            return UserRolesResponse(user_id=data.user_id, roles=roles)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)
