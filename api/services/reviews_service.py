"""Reviews users leave for each other."""

from uuid import UUID

from core.errors import BusinessRuleError, ConflictError
from core.logger import get_logger
from models import Review
from repositories.review_repository import ReviewRepository
from repositories.user_repository import UserRepository
from schemas import ReviewCreate, ReviewUpdate
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)


class ReviewsService:
    def __init__(self, reviews: ReviewRepository, users: UserRepository):
        self.reviews = reviews
        self.users = users

    async def create_review(self, data: ReviewCreate) -> Review:
        """One review per reviewer, reviewee and project. Self-reviews are rejected."""
        if data.from_user_id == data.to_user_id:
            raise BusinessRuleError("Users cannot review themselves")
        await get_or_raise(self.users, data.from_user_id, "User")
        await get_or_raise(self.users, data.to_user_id, "User")

        existing = await self.reviews.find_existing(
            data.from_user_id, data.to_user_id, data.project_id
        )
        if existing is not None:
            raise ConflictError(
                "A review for this user and project already exists",
                details={"review_id": str(existing.id)},
            )

        review = await self.reviews.create(**data.model_dump())
        logger.info(
            "review.created",
            review_id=str(review.id),
            to_user_id=str(review.to_user_id),
            score=review.score,
        )
        return review

    async def list_reviews(
        self,
        *,
        to_user_id: UUID | None = None,
        from_user_id: UUID | None = None,
    ) -> list[Review]:
        return await self.reviews.list_reviews(
            to_user_id=to_user_id, from_user_id=from_user_id
        )

    async def get_review(self, review_id: UUID) -> Review:
        return await get_or_raise(self.reviews, review_id, "Review")

    async def update_review(self, review_id: UUID, data: ReviewUpdate) -> Review:
        review = await get_or_raise(self.reviews, review_id, "Review")
        return await self.reviews.update(review, changed_fields(data))

    async def delete_review(self, review_id: UUID) -> None:
        await delete_or_raise(self.reviews, review_id, "Review")
