"""User API: thin routes delegating to UserService.

Reads carry a provenance tag (source=cache|database). Validation, email
uniqueness and cache invalidation live in the service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import get_user_service, parse_user_id
from app.application.dtos.user import UserRecord
from app.application.services.user_service import UserService
from app.core.limiter import limit_writes
from app.schemas.envelope import ApiResponse, PaginationInfo
from app.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest

router = APIRouter()

UserId = Annotated[int, Depends(parse_user_id)]
Users = Annotated[UserService, Depends(get_user_service)]


def _data(user: UserRecord) -> UserResponse:
    return UserResponse.from_record(user)


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    response_model_exclude_unset=True,
)
async def list_users(
    users: Users,
    page: Annotated[int | None, Query()] = None,
    limit: Annotated[int | None, Query()] = None,
):
    """List users. With page/limit, returns one page plus a pagination block."""
    result = await users.list_users(page=page, limit=limit)
    extra = {}
    if result.page is not None:
        extra["pagination"] = PaginationInfo(**result.page.pagination())
    return ApiResponse(
        success=True,
        data=[_data(u) for u in result.users],
        message=f"Users retrieved from {result.source.value}",
        source=result.source.value,
        **extra,
    )


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
)
async def get_user(user_id: UserId, users: Users):
    """Get user by id (cache-aside on the postgres backend)."""
    result = await users.get_user(user_id)
    return ApiResponse(
        success=True,
        data=_data(result.user),
        message=f"User retrieved from {result.source.value}",
        source=result.source.value,
    )


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
    status_code=201,
)
@limit_writes
async def create_user(request: Request, body: UserCreateRequest, users: Users):
    """Create a user; 409 when the email is already registered."""
    user = await users.create_user(body.name, body.email, body.age)
    return ApiResponse(success=True, data=_data(user), message="User created successfully")


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
)
@limit_writes
async def replace_user(
    request: Request, user_id: UserId, body: UserUpdateRequest, users: Users
):
    """Update a user; name and email are required."""
    user = await users.update_user(user_id, body.to_update(), partial=False)
    return ApiResponse(success=True, data=_data(user), message="User updated successfully")


@router.patch(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
)
@limit_writes
async def patch_user(
    request: Request, user_id: UserId, body: UserUpdateRequest, users: Users
):
    """Partially update a user; only provided fields change."""
    user = await users.update_user(user_id, body.to_update(), partial=True)
    return ApiResponse(success=True, data=_data(user), message="User updated successfully")


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_unset=True,
)
@limit_writes
async def delete_user(request: Request, user_id: UserId, users: Users):
    """Delete a user and return the deleted snapshot."""
    user = await users.delete_user(user_id)
    return ApiResponse(success=True, data=_data(user), message="User deleted successfully")
