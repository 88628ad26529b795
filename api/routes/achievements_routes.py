"""Achievement catalog and award endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import AchievementsServiceDep
from schemas import (
    AchievementCreate,
    AchievementResponse,
    AchievementUpdate,
    ApiResponse,
    UserAchievementCreate,
    UserAchievementResponse,
)

router = APIRouter(prefix="/achievements", tags=["achievements"])
awards_router = APIRouter(prefix="/user-achievements", tags=["achievements"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[AchievementResponse],
)
@limiter.limit(WRITE_LIMIT)
async def create_achievement(
    request: Request, body: AchievementCreate, service: AchievementsServiceDep
) -> ApiResponse[AchievementResponse]:
    achievement = await service.create_achievement(body)
    return ApiResponse(
        message="Achievement created successfully",
        data=AchievementResponse.model_validate(achievement),
    )


@router.get("", response_model=ApiResponse[list[AchievementResponse]])
async def list_achievements(
    service: AchievementsServiceDep,
) -> ApiResponse[list[AchievementResponse]]:
    achievements = await service.list_achievements()
    return ApiResponse(
        message="Achievements retrieved successfully",
        data=[AchievementResponse.model_validate(a) for a in achievements],
    )


@router.get("/{achievement_id}", response_model=ApiResponse[AchievementResponse])
async def get_achievement(
    achievement_id: UUID, service: AchievementsServiceDep
) -> ApiResponse[AchievementResponse]:
    achievement = await service.get_achievement(achievement_id)
    return ApiResponse(
        message="Achievement retrieved successfully",
        data=AchievementResponse.model_validate(achievement),
    )


@router.patch("/{achievement_id}", response_model=ApiResponse[AchievementResponse])
async def update_achievement(
    achievement_id: UUID, body: AchievementUpdate, service: AchievementsServiceDep
) -> ApiResponse[AchievementResponse]:
    achievement = await service.update_achievement(achievement_id, body)
    return ApiResponse(
        message="Achievement updated successfully",
        data=AchievementResponse.model_validate(achievement),
    )


@router.delete("/{achievement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_achievement(
    achievement_id: UUID, service: AchievementsServiceDep
) -> Response:
    await service.delete_achievement(achievement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@awards_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserAchievementResponse],
    responses={409: {"description": "Achievement already earned"}},
)
@limiter.limit(WRITE_LIMIT)
async def award_achievement(
    request: Request, body: UserAchievementCreate, service: AchievementsServiceDep
) -> ApiResponse[UserAchievementResponse]:
    earned = await service.award(body)
    return ApiResponse(
        message="Achievement awarded successfully",
        data=UserAchievementResponse.model_validate(earned),
    )


@awards_router.get("", response_model=ApiResponse[list[UserAchievementResponse]])
async def list_user_achievements(
    service: AchievementsServiceDep, user_id: UUID | None = None
) -> ApiResponse[list[UserAchievementResponse]]:
    earned = await service.list_awarded(user_id)
    return ApiResponse(
        message="User achievements retrieved successfully",
        data=[UserAchievementResponse.model_validate(e) for e in earned],
    )


@awards_router.get(
    "/{user_achievement_id}", response_model=ApiResponse[UserAchievementResponse]
)
async def get_user_achievement(
    user_achievement_id: UUID, service: AchievementsServiceDep
) -> ApiResponse[UserAchievementResponse]:
    earned = await service.get_awarded(user_achievement_id)
    return ApiResponse(
        message="User achievement retrieved successfully",
        data=UserAchievementResponse.model_validate(earned),
    )


@awards_router.delete(
    "/{user_achievement_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def revoke_user_achievement(
    user_achievement_id: UUID, service: AchievementsServiceDep
) -> Response:
    await service.revoke(user_achievement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
