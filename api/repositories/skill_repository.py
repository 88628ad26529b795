"""Skill catalog and freelancer-skill repositories."""

from uuid import UUID

from sqlalchemy import select

from models import ExperienceLevel, FreelancerSkill, Skill
from repositories.base import BaseRepository


class SkillRepository(BaseRepository[Skill]):
    model = Skill

    async def get_by_name(self, name: str) -> Skill | None:
        return await self.get_by_field(Skill.name, name)

    async def list_skills(self) -> list[Skill]:
        return await self.find_all(order_by=[Skill.name])


class FreelancerSkillRepository(BaseRepository[FreelancerSkill]):
    """Keyed by (user_id, skill_id)."""

    model = FreelancerSkill

    async def list_for_user(
        self, user_id: UUID | None = None
    ) -> list[FreelancerSkill]:
        conditions = []
        if user_id is not None:
            conditions.append(FreelancerSkill.user_id == user_id)
        return await self.find_all(*conditions, order_by=[FreelancerSkill.created_at])

    async def list_with_names(
        self, user_id: UUID
    ) -> list[tuple[UUID, str, ExperienceLevel]]:
        """(skill_id, skill name, experience level) rows for one user, by name."""
        result = await self.db.execute(
            select(
                FreelancerSkill.skill_id,
                Skill.name,
                FreelancerSkill.experience_level,
            )
            .join(Skill, Skill.id == FreelancerSkill.skill_id)
            .where(FreelancerSkill.user_id == user_id)
            .order_by(Skill.name)
        )
        return [tuple(row) for row in result.all()]
