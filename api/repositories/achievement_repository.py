"""Achievement catalog and earned-achievement repositories."""

from uuid import UUID

from models import Achievement, UserAchievement
from repositories.base import BaseRepository


class AchievementRepository(BaseRepository[Achievement]):
    model = Achievement

    async def get_by_name(self, name: str) -> Achievement | None:
        return await self.get_by_field(Achievement.name, name)

    async def list_achievements(self) -> list[Achievement]:
        return await self.find_all(order_by=[Achievement.name])


class UserAchievementRepository(BaseRepository[UserAchievement]):
    model = UserAchievement

    async def get_for_user(
        self, user_id: UUID, achievement_id: UUID
    ) -> UserAchievement | None:
        result = await self.find_all(
            UserAchievement.user_id == user_id,
            UserAchievement.achievement_id == achievement_id,
        )
        return result[0] if result else None

    async def list_earned(
        self, *, user_id: UUID | None = None
    ) -> list[UserAchievement]:
        conditions = []
        if user_id is not None:
            conditions.append(UserAchievement.user_id == user_id)
        return await self.find_all(
            *conditions, order_by=[UserAchievement.earned_at.desc()]
        )
