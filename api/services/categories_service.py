"""Category catalog and service-category links."""

from uuid import UUID

from core.errors import ConflictError, NotFoundError
from models import Category, ServiceCategory
from repositories.category_repository import (
    CategoryRepository,
    ServiceCategoryRepository,
)
from repositories.service_repository import ServiceRepository
from schemas import CategoryCreate, CategoryUpdate, ServiceCategoryCreate
from services.common import changed_fields, delete_or_raise, get_or_raise


class CategoriesService:
    def __init__(
        self,
        categories: CategoryRepository,
        links: ServiceCategoryRepository,
        services: ServiceRepository,
    ):
        self.categories = categories
        self.links = links
        self.services = services

    async def _ensure_name_free(
        self, name: str, exclude_id: UUID | None = None
    ) -> None:
        existing = await self.categories.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                "A category with this name already exists", details={"field": "name"}
            )

    async def create_category(self, data: CategoryCreate) -> Category:
        await self._ensure_name_free(data.name)
        return await self.categories.create(**data.model_dump())

    async def list_categories(self) -> list[Category]:
        return await self.categories.list_categories()

    async def get_category(self, category_id: UUID) -> Category:
        return await get_or_raise(self.categories, category_id, "Category")

    async def update_category(
        self, category_id: UUID, data: CategoryUpdate
    ) -> Category:
        category = await get_or_raise(self.categories, category_id, "Category")
        changes = changed_fields(data)
        if "name" in changes:
            await self._ensure_name_free(changes["name"], exclude_id=category.id)
        return await self.categories.update(category, changes)

    async def delete_category(self, category_id: UUID) -> None:
        await delete_or_raise(self.categories, category_id, "Category")

    async def _ensure_parents(self, service_id: UUID, category_id: UUID) -> None:
        await get_or_raise(self.services, service_id, "Service")
        await get_or_raise(self.categories, category_id, "Category")

    async def link_service(self, data: ServiceCategoryCreate) -> ServiceCategory:
        await self._ensure_parents(data.service_id, data.category_id)
        if await self.links.exists((data.service_id, data.category_id)):
            raise ConflictError("Service is already in this category")
        return await self.links.create(**data.model_dump())

    async def list_links(
        self,
        *,
        service_id: UUID | None = None,
        category_id: UUID | None = None,
    ) -> list[ServiceCategory]:
        return await self.links.list_links(
            service_id=service_id, category_id=category_id
        )

    async def get_link(self, service_id: UUID, category_id: UUID) -> ServiceCategory:
        await self._ensure_parents(service_id, category_id)
        link = await self.links.get_by_id((service_id, category_id))
        if link is None:
            raise NotFoundError("ServiceCategory", f"{service_id}/{category_id}")
        return link

    async def unlink_service(self, service_id: UUID, category_id: UUID) -> None:
        await self._ensure_parents(service_id, category_id)
        await delete_or_raise(
            self.links, (service_id, category_id), "ServiceCategory"
        )
