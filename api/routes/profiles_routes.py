"""Public profile endpoint."""

from uuid import UUID

from fastapi import APIRouter

from routes.dependencies import ProfilesServiceDep
from schemas import ApiResponse, ProfileResponse

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/{user_id}",
    response_model=ApiResponse[ProfileResponse],
    responses={404: {"description": "User not found"}},
)
async def get_profile(
    user_id: UUID, service: ProfilesServiceDep
) -> ApiResponse[ProfileResponse]:
    """Public view of a user with skills, active services and rating.

    Private account fields (email, role, 2FA) are never included.
    """
    profile = await service.get_profile(user_id)
    return ApiResponse(message="Profile retrieved successfully", data=profile)
