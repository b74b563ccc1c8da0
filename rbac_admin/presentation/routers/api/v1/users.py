"""User management endpoints (JWT + authorization gate).

Handlers:
    register_user     POST   /users/register
    list_users        GET    /users/
    get_user          GET    /users/{user_id}
    update_user       PUT    /users/{user_id}
    delete_user       DELETE /users/{user_id}
    change_password   PUT    /users/{user_id}/password
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from rbac_admin.application.commands import (
    ChangePassword,
    DeleteUser,
    RegisterUser,
    UpdateUser,
)
from rbac_admin.application.commands.handlers.user_handlers import (
    ChangePasswordHandler,
    DeleteUserHandler,
    RegisterUserHandler,
    UpdateUserHandler,
)
from rbac_admin.application.queries import GetUser, ListUsers
from rbac_admin.application.queries.handlers.rbac_query_handlers import (
    GetUserHandler,
    ListUsersHandler,
)
from rbac_admin.core.container import (
    get_change_password_handler,
    get_delete_user_handler,
    get_get_user_handler,
    get_list_users_handler,
    get_register_user_handler,
    get_update_user_handler,
)
from rbac_admin.core.result import Failure, Success
from rbac_admin.presentation.routers.api.middleware.authorization_dependencies import (
    require_access,
)
from rbac_admin.presentation.routers.api.v1.errors import ErrorResponseBuilder
from rbac_admin.schemas.permission_schemas import MessageResponse
from rbac_admin.schemas.user_schemas import (
    ChangePasswordRequest,
    UserListResponse,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_access)],
)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    request: Request,
    data: UserRegisterRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> UserResponse | JSONResponse:
    """Create an account holding the default ``user`` role.

    Duplicate username, email or phone -> 400.
    """
    result = await handler.handle(
        RegisterUser(
            username=data.username,
            password=data.password,
            email=data.email,
            phone=data.phone,
            nickname=data.nickname,
        )
    )
    match result:
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.get("/", response_model=UserListResponse)
async def list_users(
    request: Request,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    handler: ListUsersHandler = Depends(get_list_users_handler),
) -> UserListResponse | JSONResponse:
    match await handler.handle(ListUsers(page=page, page_size=page_size)):
        case Success(value=result):
            return UserListResponse.from_page(result)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    request: Request,
    user_id: int,
    handler: GetUserHandler = Depends(get_get_user_handler),
) -> UserResponse | JSONResponse:
    match await handler.handle(GetUser(user_id=user_id)):
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    request: Request,
    user_id: int,
    data: UserUpdateRequest,
    handler: UpdateUserHandler = Depends(get_update_user_handler),
) -> UserResponse | JSONResponse:
    result = await handler.handle(
        UpdateUser(
            user_id=user_id,
            email=data.email,
            phone=data.phone,
            nickname=data.nickname,
            avatar=data.avatar,
            status=data.status,
        )
    )
    match result:
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    request: Request,
    user_id: int,
    handler: DeleteUserHandler = Depends(get_delete_user_handler),
) -> MessageResponse | JSONResponse:
    """Soft-delete the user and drop its role memberships."""
    match await handler.handle(DeleteUser(user_id=user_id)):
        case Success():
            return MessageResponse(message="User deleted")
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)


@router.put("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    request: Request,
    user_id: int,
    data: ChangePasswordRequest,
    handler: ChangePasswordHandler = Depends(get_change_password_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(
        ChangePassword(
            user_id=user_id,
            old_password=data.old_password,
            new_password=data.new_password,
        )
    )
    match result:
        case Success():
            return MessageResponse(message="Password changed")
        case Failure(error=error):
            return ErrorResponseBuilder.from_application_error(error, request)
