"""Clients asking freelancers to take on a service.

A request starts pending and is answered exactly once by the service's owner.
"""

from uuid import UUID

from core.errors import ConflictError, ForbiddenError, InvalidStatusTransitionError
from core.logger import get_logger
from core.telemetry import log_business_event
from models import ServiceRequest, ServiceRequestStatus
from repositories.service_repository import ServiceRepository
from repositories.service_request_repository import ServiceRequestRepository
from repositories.user_repository import UserRepository
from schemas import ServiceRequestCreate, ServiceRequestStatusUpdate
from services.common import delete_or_raise, get_or_raise

logger = get_logger(__name__)


class ServiceRequestsService:
    def __init__(
        self,
        requests: ServiceRequestRepository,
        services: ServiceRepository,
        users: UserRepository,
    ):
        self.requests = requests
        self.services = services
        self.users = users

    async def create_request(self, data: ServiceRequestCreate) -> ServiceRequest:
        """Open a request for someone else's service.

        Freelancers cannot request their own service, and a client may hold
        only one pending request per service.
        """
        service = await get_or_raise(self.services, data.service_id, "Service")
        await get_or_raise(self.users, data.client_id, "User")
        if service.freelancer_id == data.client_id:
            raise ForbiddenError(
                "Cannot request your own service",
                details={"service_id": str(service.id)},
            )
        if await self.requests.find_pending(data.service_id, data.client_id):
            raise ConflictError(
                "You already have a pending request for this service",
                details={"service_id": str(data.service_id)},
            )

        request = await self.requests.create(
            **data.model_dump(), status=ServiceRequestStatus.PENDING
        )
        logger.info(
            "service_request.created",
            request_id=str(request.id),
            service_id=str(request.service_id),
        )
        return request

    async def list_requests(
        self,
        *,
        service_id: UUID | None = None,
        client_id: UUID | None = None,
        status: ServiceRequestStatus | None = None,
    ) -> list[ServiceRequest]:
        return await self.requests.list_requests(
            service_id=service_id, client_id=client_id, status=status
        )

    async def list_for_freelancer(self, freelancer_id: UUID) -> list[ServiceRequest]:
        await get_or_raise(self.users, freelancer_id, "User")
        return await self.requests.list_for_freelancer(freelancer_id)

    async def get_request(self, request_id: UUID) -> ServiceRequest:
        return await get_or_raise(self.requests, request_id, "ServiceRequest")

    async def answer_request(
        self, request_id: UUID, data: ServiceRequestStatusUpdate
    ) -> ServiceRequest:
        """Accept or reject a pending request on behalf of the service owner."""
        request = await get_or_raise(self.requests, request_id, "ServiceRequest")
        service = await get_or_raise(self.services, request.service_id, "Service")
        if service.freelancer_id != data.freelancer_id:
            raise ForbiddenError(
                "You can only update requests for your own services",
                details={"service_id": str(service.id)},
            )
        if request.status != ServiceRequestStatus.PENDING:
            raise InvalidStatusTransitionError(
                request.status.value, data.status.value
            )

        request = await self.requests.update(request, {"status": data.status})
        logger.info(
            "service_request.answered",
            request_id=str(request.id),
            status=request.status.value,
        )
        log_business_event(
            "service_requests.answered", properties={"status": request.status.value}
        )
        return request

    async def delete_request(self, request_id: UUID) -> None:
        await delete_or_raise(self.requests, request_id, "ServiceRequest")
