"""Review endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import ReviewsServiceDep
from schemas import ApiResponse, ReviewCreate, ReviewResponse, ReviewUpdate

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ReviewResponse],
    responses={
        400: {"description": "Self-review"},
        409: {"description": "Review for this project already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def create_review(
    request: Request, body: ReviewCreate, service: ReviewsServiceDep
) -> ApiResponse[ReviewResponse]:
    review = await service.create_review(body)
    return ApiResponse(
        message="Review created successfully",
        data=ReviewResponse.model_validate(review),
    )


@router.get("", response_model=ApiResponse[list[ReviewResponse]])
async def list_reviews(
    service: ReviewsServiceDep,
    to_user_id: UUID | None = None,
    from_user_id: UUID | None = None,
) -> ApiResponse[list[ReviewResponse]]:
    reviews = await service.list_reviews(
        to_user_id=to_user_id, from_user_id=from_user_id
    )
    return ApiResponse(
        message="Reviews retrieved successfully",
        data=[ReviewResponse.model_validate(r) for r in reviews],
    )


@router.get("/{review_id}", response_model=ApiResponse[ReviewResponse])
async def get_review(
    review_id: UUID, service: ReviewsServiceDep
) -> ApiResponse[ReviewResponse]:
    review = await service.get_review(review_id)
    return ApiResponse(
        message="Review retrieved successfully",
        data=ReviewResponse.model_validate(review),
    )


@router.patch("/{review_id}", response_model=ApiResponse[ReviewResponse])
async def update_review(
    review_id: UUID, body: ReviewUpdate, service: ReviewsServiceDep
) -> ApiResponse[ReviewResponse]:
    review = await service.update_review(review_id, body)
    return ApiResponse(
        message="Review updated successfully",
        data=ReviewResponse.model_validate(review),
    )


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(review_id: UUID, service: ReviewsServiceDep) -> Response:
    await service.delete_review(review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
