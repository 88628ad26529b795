"""Public profile assembly.

A profile is a read-only view stitched together from the user row, their
claimed skills, active service count and the reviews they have received.
"""

from uuid import UUID

from repositories.review_repository import ReviewRepository
from repositories.service_repository import ServiceRepository
from repositories.skill_repository import FreelancerSkillRepository
from repositories.user_repository import UserRepository
from schemas import ProfileResponse, ProfileSkill
from services.common import get_or_raise


class ProfilesService:
    def __init__(
        self,
        users: UserRepository,
        freelancer_skills: FreelancerSkillRepository,
        services: ServiceRepository,
        reviews: ReviewRepository,
    ):
        self.users = users
        self.freelancer_skills = freelancer_skills
        self.services = services
        self.reviews = reviews

    async def get_profile(self, user_id: UUID) -> ProfileResponse:
        # One AsyncSession cannot run queries concurrently.
        user = await get_or_raise(self.users, user_id, "User")
        skill_rows = await self.freelancer_skills.list_with_names(user.id)
        active_services = await self.services.count_active_for_freelancer(user.id)
        rating = await self.reviews.rating_summary(user.id)

        return ProfileResponse(
            id=user.id,
            username=user.username,
            name=user.name,
            bio=user.bio,
            wallet_address=user.wallet_address,
            is_freelancer=user.is_freelancer,
            member_since=user.created_at,
            skills=[
                ProfileSkill(skill_id=skill_id, name=name, experience_level=level)
                for skill_id, name, level in skill_rows
            ],
            active_services=active_services,
            review_count=rating.review_count,
            average_score=rating.average_score,
        )
