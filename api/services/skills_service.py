"""Skill catalog and the skills freelancers claim."""

from uuid import UUID

from core.errors import ConflictError, NotFoundError
from core.logger import get_logger
from models import FreelancerSkill, Skill
from repositories.skill_repository import FreelancerSkillRepository, SkillRepository
from repositories.user_repository import UserRepository
from schemas import (
    FreelancerSkillCreate,
    FreelancerSkillUpdate,
    SkillCreate,
    SkillUpdate,
)
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)


class SkillsService:
    def __init__(
        self,
        skills: SkillRepository,
        freelancer_skills: FreelancerSkillRepository,
        users: UserRepository,
    ):
        self.skills = skills
        self.freelancer_skills = freelancer_skills
        self.users = users

    async def _ensure_name_free(
        self, name: str, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.skills.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                "A skill with this name already exists", details={"field": "name"}
            )

    async def create_skill(self, data: SkillCreate) -> Skill:
        await self._ensure_name_free(data.name)
        return await self.skills.create(**data.model_dump())

    async def list_skills(self) -> list[Skill]:
        return await self.skills.list_skills()

    async def get_skill(self, skill_id: UUID) -> Skill:
        return await get_or_raise(self.skills, skill_id, "Skill")

    async def update_skill(self, skill_id: UUID, data: SkillUpdate) -> Skill:
        skill = await get_or_raise(self.skills, skill_id, "Skill")
        changes = changed_fields(data)
        if "name" in changes:
            await self._ensure_name_free(changes["name"], exclude_id=skill.id)
        return await self.skills.update(skill, changes)

    async def delete_skill(self, skill_id: UUID) -> None:
        await delete_or_raise(self.skills, skill_id, "Skill")

    # Freelancer skills are addressed by (user_id, skill_id). Both parents are
    # resolved first so a missing user or skill reports its own 404.

    async def _ensure_parents(self, user_id: UUID, skill_id: UUID) -> None:
        await get_or_raise(self.users, user_id, "User")
        await get_or_raise(self.skills, skill_id, "Skill")

    async def _get_link(self, user_id: UUID, skill_id: UUID) -> FreelancerSkill:
        await self._ensure_parents(user_id, skill_id)
        link = await self.freelancer_skills.get_by_id((user_id, skill_id))
        if link is None:
            raise NotFoundError("FreelancerSkill", f"{user_id}/{skill_id}")
        return link

    async def add_freelancer_skill(
        self, data: FreelancerSkillCreate
    ) -> FreelancerSkill:
        await self._ensure_parents(data.user_id, data.skill_id)
        if await self.freelancer_skills.exists((data.user_id, data.skill_id)):
            raise ConflictError("User already has this skill")

        link = await self.freelancer_skills.create(**data.model_dump())
        logger.info(
            "freelancer_skill.added",
            user_id=str(data.user_id),
            skill_id=str(data.skill_id),
            experience_level=data.experience_level.value,
        )
        return link

    async def list_freelancer_skills(
        self, user_id: UUID | None = None
    ) -> list[FreelancerSkill]:
        return await self.freelancer_skills.list_for_user(user_id)

    async def get_freelancer_skill(
        self, user_id: UUID, skill_id: UUID
    ) -> FreelancerSkill:
        return await self._get_link(user_id, skill_id)

    async def update_freelancer_skill(
        self, user_id: UUID, skill_id: UUID, data: FreelancerSkillUpdate
    ) -> FreelancerSkill:
        link = await self._get_link(user_id, skill_id)
        return await self.freelancer_skills.update(link, changed_fields(data))

    async def remove_freelancer_skill(self, user_id: UUID, skill_id: UUID) -> None:
        await self._ensure_parents(user_id, skill_id)
        await delete_or_raise(
            self.freelancer_skills, (user_id, skill_id), "FreelancerSkill"
        )
