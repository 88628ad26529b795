"""Service (freelancer offering) repository."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, or_, select

from models import Service
from repositories.base import BaseRepository
from repositories.utils import escape_like, log_slow_query


class ServiceRepository(BaseRepository[Service]):
    model = Service

    @log_slow_query("list_services")
    async def list_services(
        self,
        *,
        freelancer_id: UUID | None = None,
        is_active: bool | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        keyword: str | None = None,
    ) -> list[Service]:
        """List services matching every given filter, newest first."""
        conditions = []
        if freelancer_id is not None:
            conditions.append(Service.freelancer_id == freelancer_id)
        if is_active is not None:
            conditions.append(Service.is_active == is_active)
        if min_price is not None:
            conditions.append(Service.base_price >= min_price)
        if max_price is not None:
            conditions.append(Service.base_price <= max_price)
        if keyword:
            pattern = f"%{escape_like(keyword.lower())}%"
            conditions.append(
                or_(
                    func.lower(Service.title).like(pattern, escape="\\"),
                    func.lower(Service.description).like(pattern, escape="\\"),
                )
            )
        return await self.find_all(*conditions, order_by=[Service.created_at.desc()])

    async def count_active_for_freelancer(self, freelancer_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Service)
            .where(
                Service.freelancer_id == freelancer_id,
                Service.is_active.is_(True),
            )
        )
        return result.scalar_one()
