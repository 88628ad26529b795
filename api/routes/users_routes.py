"""User account endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import UsersServiceDep
from schemas import ApiResponse, UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserResponse],
    responses={409: {"description": "Wallet, username or email already taken"}},
)
@limiter.limit(WRITE_LIMIT)
async def create_user(
    request: Request, body: UserCreate, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    user = await service.create_user(body)
    return ApiResponse(
        message="User created successfully", data=UserResponse.model_validate(user)
    )


@router.get("", response_model=ApiResponse[list[UserResponse]])
async def list_users(
    service: UsersServiceDep,
    is_freelancer: bool | None = None,
    is_active: bool | None = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> ApiResponse[list[UserResponse]]:
    """List users, newest first.

    ``search`` matches name, email or username case-insensitively.
    """
    users = await service.list_users(
        is_freelancer=is_freelancer, is_active=is_active, search=search
    )
    return ApiResponse(
        message="Users retrieved successfully",
        data=[UserResponse.model_validate(u) for u in users],
    )


@router.get("/wallet/{wallet_address}", response_model=ApiResponse[UserResponse])
async def get_user_by_wallet(
    wallet_address: str, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    user = await service.get_by_wallet_address(wallet_address)
    return ApiResponse(
        message="User retrieved successfully", data=UserResponse.model_validate(user)
    )


@router.get("/username/{username}", response_model=ApiResponse[UserResponse])
async def get_user_by_username(
    username: str, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    user = await service.get_by_username(username)
    return ApiResponse(
        message="User retrieved successfully", data=UserResponse.model_validate(user)
    )


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: UUID, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    user = await service.get_user(user_id)
    return ApiResponse(
        message="User retrieved successfully", data=UserResponse.model_validate(user)
    )


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: UUID, body: UserUpdate, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    user = await service.update_user(user_id, body)
    return ApiResponse(
        message="User updated successfully", data=UserResponse.model_validate(user)
    )


@router.post("/{user_id}/login", response_model=ApiResponse[UserResponse])
@limiter.limit(WRITE_LIMIT)
async def record_login(
    request: Request, user_id: UUID, service: UsersServiceDep
) -> ApiResponse[UserResponse]:
    """Stamp ``last_login`` for the user."""
    user = await service.record_login(user_id)
    return ApiResponse(
        message="Login recorded", data=UserResponse.model_validate(user)
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, service: UsersServiceDep) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
