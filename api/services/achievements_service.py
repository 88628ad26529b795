"""Achievement catalog and awards."""

from uuid import UUID

from core.errors import ConflictError
from core.logger import get_logger
from core.telemetry import log_business_event
from models import Achievement, UserAchievement
from repositories.achievement_repository import (
    AchievementRepository,
    UserAchievementRepository,
)
from repositories.user_repository import UserRepository
from schemas import AchievementCreate, AchievementUpdate, UserAchievementCreate
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)


class AchievementsService:
    def __init__(
        self,
        achievements: AchievementRepository,
        earned: UserAchievementRepository,
        users: UserRepository,
    ):
        self.achievements = achievements
        self.earned = earned
        self.users = users

    async def _ensure_name_free(
        self, name: str, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.achievements.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                "An achievement with this name already exists",
                details={"field": "name"},
            )

    async def create_achievement(self, data: AchievementCreate) -> Achievement:
        await self._ensure_name_free(data.name)
        return await self.achievements.create(**data.model_dump())

    async def list_achievements(self) -> list[Achievement]:
        return await self.achievements.list_achievements()

    async def get_achievement(self, achievement_id: UUID) -> Achievement:
        return await get_or_raise(self.achievements, achievement_id, "Achievement")

    async def update_achievement(
        self, achievement_id: UUID, data: AchievementUpdate
    ) -> Achievement:
        achievement = await get_or_raise(
            self.achievements, achievement_id, "Achievement"
        )
        changes = changed_fields(data)
        if "name" in changes:
            await self._ensure_name_free(changes["name"], exclude_id=achievement.id)
        return await self.achievements.update(achievement, changes)

    async def delete_achievement(self, achievement_id: UUID) -> None:
        await delete_or_raise(self.achievements, achievement_id, "Achievement")

    async def award(self, data: UserAchievementCreate) -> UserAchievement:
        """Grant an achievement to a user. Each achievement is earned at most once."""
        await get_or_raise(self.users, data.user_id, "User")
        achievement = await get_or_raise(
            self.achievements, data.achievement_id, "Achievement"
        )
        if await self.earned.get_for_user(data.user_id, data.achievement_id):
            raise ConflictError("User already earned this achievement")

        earned = await self.earned.create(**data.model_dump())
        logger.info(
            "achievement.awarded",
            user_id=str(data.user_id),
            achievement=achievement.name,
            points=achievement.points,
        )
        log_business_event(
            "achievements.awarded", properties={"name": achievement.name}
        )
        return earned

    async def list_awarded(self, user_id: UUID | None = None) -> list[UserAchievement]:
        return await self.earned.list_earned(user_id=user_id)

    async def get_awarded(self, user_achievement_id: UUID) -> UserAchievement:
        return await get_or_raise(self.earned, user_achievement_id, "UserAchievement")

    async def revoke(self, user_achievement_id: UUID) -> None:
        await delete_or_raise(self.earned, user_achievement_id, "UserAchievement")
