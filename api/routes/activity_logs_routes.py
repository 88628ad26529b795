"""Activity log endpoints. Entries are never edited, so there is no PATCH."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import ActivityLogsServiceDep
from schemas import ActivityLogCreate, ActivityLogResponse, ApiResponse

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ActivityLogResponse],
)
@limiter.limit(WRITE_LIMIT)
async def create_activity_log(
    request: Request, body: ActivityLogCreate, service: ActivityLogsServiceDep
) -> ApiResponse[ActivityLogResponse]:
    entry = await service.record(body)
    return ApiResponse(
        message="Activity logged successfully",
        data=ActivityLogResponse.model_validate(entry),
    )


@router.get("", response_model=ApiResponse[list[ActivityLogResponse]])
async def list_activity_logs(
    service: ActivityLogsServiceDep,
    user_id: UUID | None = None,
    action_type: str | None = None,
) -> ApiResponse[list[ActivityLogResponse]]:
    entries = await service.list_logs(user_id=user_id, action_type=action_type)
    return ApiResponse(
        message="Activity logs retrieved successfully",
        data=[ActivityLogResponse.model_validate(e) for e in entries],
    )


@router.get("/{log_id}", response_model=ApiResponse[ActivityLogResponse])
async def get_activity_log(
    log_id: UUID, service: ActivityLogsServiceDep
) -> ApiResponse[ActivityLogResponse]:
    entry = await service.get_log(log_id)
    return ApiResponse(
        message="Activity log retrieved successfully",
        data=ActivityLogResponse.model_validate(entry),
    )


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity_log(
    log_id: UUID, service: ActivityLogsServiceDep
) -> Response:
    await service.delete_log(log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
