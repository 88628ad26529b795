"""Unit tests for SkillsService."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from core.errors import ConflictError, NotFoundError
from models import ExperienceLevel
from schemas import FreelancerSkillCreate, FreelancerSkillUpdate, SkillCreate
from services.skills_service import SkillsService


@pytest.fixture
def repos():
    skills, freelancer_skills, users = AsyncMock(), AsyncMock(), AsyncMock()
    skills.get_by_name.return_value = None
    return skills, freelancer_skills, users


@pytest.mark.unit
class TestSkillCatalog:
    async def test_duplicate_name_conflicts(self, repos):
        skills, freelancer_skills, users = repos
        skills.get_by_name.return_value = SimpleNamespace(id=uuid.uuid4())

        with pytest.raises(ConflictError) as exc_info:
            await SkillsService(skills, freelancer_skills, users).create_skill(
                SkillCreate(name="Solidity")
            )

        assert exc_info.value.details == {"field": "name"}


@pytest.mark.unit
class TestFreelancerSkills:
    async def test_missing_skill_reports_skill(self, repos):
        """Each missing parent reports its own entity."""
        skills, freelancer_skills, users = repos
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        skills.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await SkillsService(skills, freelancer_skills, users).add_freelancer_skill(
                FreelancerSkillCreate(
                    user_id=uuid.uuid4(),
                    skill_id=uuid.uuid4(),
                    experience_level=ExperienceLevel.EXPERT,
                )
            )

        assert exc_info.value.entity == "Skill"

    async def test_existing_link_conflicts(self, repos):
        skills, freelancer_skills, users = repos
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        skills.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        freelancer_skills.exists.return_value = True

        with pytest.raises(ConflictError):
            await SkillsService(skills, freelancer_skills, users).add_freelancer_skill(
                FreelancerSkillCreate(
                    user_id=uuid.uuid4(),
                    skill_id=uuid.uuid4(),
                    experience_level=ExperienceLevel.BEGINNER,
                )
            )

    async def test_missing_link_reports_freelancer_skill(self, repos):
        skills, freelancer_skills, users = repos
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        skills.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        freelancer_skills.get_by_id.return_value = None
        user_id, skill_id = uuid.uuid4(), uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            await SkillsService(skills, freelancer_skills, users).get_freelancer_skill(
                user_id, skill_id
            )

        assert exc_info.value.entity == "FreelancerSkill"
        assert exc_info.value.details["id"] == f"{user_id}/{skill_id}"

    async def test_update_changes_experience_level(self, repos):
        skills, freelancer_skills, users = repos
        link = SimpleNamespace(experience_level=ExperienceLevel.BEGINNER)
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        skills.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        freelancer_skills.get_by_id.return_value = link
        freelancer_skills.update.return_value = link

        await SkillsService(skills, freelancer_skills, users).update_freelancer_skill(
            uuid.uuid4(),
            uuid.uuid4(),
            FreelancerSkillUpdate(experience_level=ExperienceLevel.EXPERT),
        )

        freelancer_skills.update.assert_awaited_once_with(
            link, {"experience_level": ExperienceLevel.EXPERT}
        )
