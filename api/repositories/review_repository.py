"""Review (rating) repository."""

from typing import NamedTuple
from uuid import UUID

from sqlalchemy import func, select

from models import Review
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class RatingSummary(NamedTuple):
    review_count: int
    average_score: float | None


class ReviewRepository(BaseRepository[Review]):
    model = Review

    async def find_existing(
        self, from_user_id: UUID, to_user_id: UUID, project_id: UUID | None
    ) -> Review | None:
        """Find a review for the same reviewer, reviewee and project.

        NULL project ids never collide in a UNIQUE index, so the service checks
        this explicitly before insert.
        """
        project_condition = (
            Review.project_id.is_(None)
            if project_id is None
            else Review.project_id == project_id
        )
        result = await self.db.execute(
            select(Review).where(
                Review.from_user_id == from_user_id,
                Review.to_user_id == to_user_id,
                project_condition,
            )
        )
        return result.scalars().first()

    @log_slow_query("list_reviews")
    async def list_reviews(
        self,
        *,
        to_user_id: UUID | None = None,
        from_user_id: UUID | None = None,
    ) -> list[Review]:
        conditions = []
        if to_user_id is not None:
            conditions.append(Review.to_user_id == to_user_id)
        if from_user_id is not None:
            conditions.append(Review.from_user_id == from_user_id)
        return await self.find_all(*conditions, order_by=[Review.created_at.desc()])

    async def rating_summary(self, user_id: UUID) -> RatingSummary:
        """Count and average score of reviews received by a user."""
        result = await self.db.execute(
            select(func.count(Review.id), func.avg(Review.score)).where(
                Review.to_user_id == user_id
            )
        )
        count, average = result.one()
        return RatingSummary(
            review_count=count,
            average_score=round(float(average), 2) if average is not None else None,
        )
