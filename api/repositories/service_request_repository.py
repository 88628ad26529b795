"""Service request repository."""

from uuid import UUID

from sqlalchemy import select

from models import Service, ServiceRequest, ServiceRequestStatus
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class ServiceRequestRepository(BaseRepository[ServiceRequest]):
    model = ServiceRequest

    async def find_pending(
        self, service_id: UUID, client_id: UUID
    ) -> ServiceRequest | None:
        """The client's open request for this service, if any."""
        result = await self.db.execute(
            select(ServiceRequest)
            .where(
                ServiceRequest.service_id == service_id,
                ServiceRequest.client_id == client_id,
                ServiceRequest.status == ServiceRequestStatus.PENDING,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @log_slow_query("list_service_requests")
    async def list_requests(
        self,
        *,
        service_id: UUID | None = None,
        client_id: UUID | None = None,
        status: ServiceRequestStatus | None = None,
    ) -> list[ServiceRequest]:
        conditions = []
        if service_id is not None:
            conditions.append(ServiceRequest.service_id == service_id)
        if client_id is not None:
            conditions.append(ServiceRequest.client_id == client_id)
        if status is not None:
            conditions.append(ServiceRequest.status == status)
        return await self.find_all(
            *conditions, order_by=[ServiceRequest.created_at.desc()]
        )

    @log_slow_query("list_service_requests_for_freelancer")
    async def list_for_freelancer(self, freelancer_id: UUID) -> list[ServiceRequest]:
        """Requests made against any of the freelancer's services, newest first."""
        return await self.find_all(
            ServiceRequest.service_id.in_(
                select(Service.id).where(Service.freelancer_id == freelancer_id)
            ),
            order_by=[ServiceRequest.created_at.desc()],
        )
