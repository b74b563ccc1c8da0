"""Role management endpoints (JWT + authorization gate).

Renaming or deleting a role rebuilds the policy engine.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from rbac_admin.application.commands import CreateRole, DeleteRole, UpdateRole
from rbac_admin.application.commands.handlers.role_handlers import (
    CreateRoleHandler,
    DeleteRoleHandler,
    UpdateRoleHandler,
)
from rbac_admin.application.queries import GetRole, ListRoles
from rbac_admin.application.queries.handlers.rbac_query_handlers import (
    GetRoleHandler,
    ListRolesHandler,
)
from rbac_admin.core.container import (
    get_create_role_handler,
    get_delete_role_handler,
    get_get_role_handler,
    get_list_roles_handler,
    get_update_role_handler,
)
from rbac_admin.core.result import Failure, Success
from rbac_admin.presentation.routers.api.middleware.authorization_dependencies import (
    require_access,
)
from rbac_admin.presentation.routers.api.v1.errors import ErrorResponseBuilder
from rbac_admin.schemas.permission_schemas import MessageResponse
from rbac_admin.schemas.role_schemas import (
    RoleCreateRequest,
    RoleResponse,
    RoleUpdateRequest,
)

router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
    dependencies=[Depends(require_access)],
)


@router.post("/", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    request: Request,
    data: RoleCreateRequest,
    handler: CreateRoleHandler = Depends(get_create_role_handler),
) -> RoleResponse | JSONResponse:
    match await handler.handle(CreateRole(name=data.name, description=data.description)):
        case Success(value=role):
            return RoleResponse.from_entity(role)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.get("/", response_model=list[RoleResponse])
async def list_roles(
    request: Request,
    handler: ListRolesHandler = Depends(get_list_roles_handler),
) -> list[RoleResponse] | JSONResponse:
    match await handler.handle(ListRoles()):
        case Success(value=roles):
            return [RoleResponse.from_entity(role) for role in roles]
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    request: Request,
    role_id: int,
    handler: GetRoleHandler = Depends(get_get_role_handler),
) -> RoleResponse | JSONResponse:
    match await handler.handle(GetRole(role_id=role_id)):
        case Success(value=role):
            return RoleResponse.from_entity(role)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.put("/", response_model=RoleResponse)
async def update_role(
    request: Request,
    data: RoleUpdateRequest,
    handler: UpdateRoleHandler = Depends(get_update_role_handler),
) -> RoleResponse | JSONResponse:
    result = await handler.handle(
        UpdateRole(role_id=data.id, name=data.name, description=data.description)
    )
    match result:
        case Success(value=role):
            return RoleResponse.from_entity(role)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.delete("/{role_id}", response_model=MessageResponse)
async def delete_role(
    request: Request,
    role_id: int,
    handler: DeleteRoleHandler = Depends(get_delete_role_handler),
) -> MessageResponse | JSONResponse:
    match await handler.handle(DeleteRole(role_id=role_id)):
        case Success():
            return MessageResponse(message="Role deleted")
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)
