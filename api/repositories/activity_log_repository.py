"""Activity log repository. Log entries are insert-only."""

from uuid import UUID

from models import ActivityLog
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class ActivityLogRepository(BaseRepository[ActivityLog]):
    model = ActivityLog

    @log_slow_query("list_activity_logs")
    async def list_logs(
        self,
        *,
        user_id: UUID | None = None,
        action_type: str | None = None,
    ) -> list[ActivityLog]:
        conditions = []
        if user_id is not None:
            conditions.append(ActivityLog.user_id == user_id)
        if action_type is not None:
            conditions.append(ActivityLog.action_type == action_type)
        return await self.find_all(
            *conditions, order_by=[ActivityLog.created_at.desc()]
        )
