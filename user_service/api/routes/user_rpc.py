"""UserService RPC: one POST route per remote method.

Invariants:
    - Paths follow /rpc/<package>.<Service>/<Method>
    - Every route is a thin delegate to UserRequestHandler
    - Errors surface through the global handlers as {"error": {...}} envelopes
"""

from fastapi import APIRouter, Depends

from user_service.api.deps import get_user_handler
from user_service.schemas.user import (
    CreateUserRequest, CreateUserResponse,
    DeleteUserRequest, DeleteUserResponse,
    GetUserByEmailRequest, GetUserByIDRequest, GetUserResponse,
    GetUsersRequest, GetUsersResponse,
    UpdateUserRequest, UpdateUserResponse,
)
from user_service.services.user_handler import UserRequestHandler

SERVICE_PATH = "/rpc/user_service.UserService"

router = APIRouter(prefix=SERVICE_PATH, tags=["users"])


@router.post("/CreateUser", response_model=CreateUserResponse)
async def create_user(
    body: CreateUserRequest,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    return await handler.create_user(body)


@router.post("/GetUserByEmail", response_model=GetUserResponse)
async def get_user_by_email(
    body: GetUserByEmailRequest,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    return await handler.get_user_by_email(body)


@router.post("/GetUserByID", response_model=GetUserResponse)
async def get_user_by_id(
    body: GetUserByIDRequest,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    return await handler.get_user_by_id(body)


@router.post("/GetUsers", response_model=GetUsersResponse)
async def get_users(
    body: GetUsersRequest | None = None,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    """Whole directory, or one page when limit/offset are given."""
    return await handler.get_users(body)


@router.post("/UpdateUser", response_model=UpdateUserResponse)
async def update_user(
    body: UpdateUserRequest,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    return await handler.update_user(body)


@router.post("/DeleteUser", response_model=DeleteUserResponse)
async def delete_user(
    body: DeleteUserRequest,
    handler: UserRequestHandler = Depends(get_user_handler),
):
    return await handler.delete_user(body)
