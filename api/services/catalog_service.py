"""Freelancer service offerings (the ``/services`` resource)."""

from uuid import UUID

from core.errors import BusinessRuleError, ForbiddenError
from core.logger import get_logger
from models import Service
from repositories.service_repository import ServiceRepository
from repositories.user_repository import UserRepository
from schemas import ServiceCreate, ServiceFilters, ServiceUpdate
from services.common import changed_fields, delete_or_raise, get_or_raise

logger = get_logger(__name__)


class CatalogService:
    def __init__(self, services: ServiceRepository, users: UserRepository):
        self.services = services
        self.users = users

    async def create_service(self, data: ServiceCreate) -> Service:
        """Publish a service. The owner must exist and be a freelancer."""
        freelancer = await get_or_raise(self.users, data.freelancer_id, "User")
        if not freelancer.is_freelancer:
            raise ForbiddenError(
                "User is not a freelancer",
                details={"user_id": str(freelancer.id)},
            )

        service = await self.services.create(**data.model_dump())
        logger.info(
            "service.created",
            service_id=str(service.id),
            freelancer_id=str(service.freelancer_id),
        )
        return service

    async def list_services(self, filters: ServiceFilters) -> list[Service]:
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise BusinessRuleError(
                "min_price cannot be greater than max_price",
                details={
                    "min_price": str(filters.min_price),
                    "max_price": str(filters.max_price),
                },
            )
        return await self.services.list_services(**filters.model_dump())

    async def get_service(self, service_id: UUID) -> Service:
        return await get_or_raise(self.services, service_id, "Service")

    async def update_service(self, service_id: UUID, data: ServiceUpdate) -> Service:
        service = await get_or_raise(self.services, service_id, "Service")
        return await self.services.update(service, changed_fields(data))

    async def delete_service(self, service_id: UUID) -> None:
        await delete_or_raise(self.services, service_id, "Service")
        logger.info("service.deleted", service_id=str(service_id))
