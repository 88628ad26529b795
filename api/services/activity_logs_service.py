"""Audit trail of user actions."""

from uuid import UUID

from models import ActivityLog
from repositories.activity_log_repository import ActivityLogRepository
from repositories.user_repository import UserRepository
from schemas import ActivityLogCreate
from services.common import delete_or_raise, get_or_raise


class ActivityLogsService:
    def __init__(self, logs: ActivityLogRepository, users: UserRepository):
        self.logs = logs
        self.users = users

    async def record(self, data: ActivityLogCreate) -> ActivityLog:
        await get_or_raise(self.users, data.user_id, "User")
        return await self.logs.create(**data.model_dump())

    async def list_logs(
        self,
        *,
        user_id: UUID | None = None,
        action_type: str | None = None,
    ) -> list[ActivityLog]:
        return await self.logs.list_logs(user_id=user_id, action_type=action_type)

    async def get_log(self, log_id: UUID) -> ActivityLog:
        return await get_or_raise(self.logs, log_id, "ActivityLog")

    async def delete_log(self, log_id: UUID) -> None:
        await delete_or_raise(self.logs, log_id, "ActivityLog")
