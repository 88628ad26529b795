"""Category and service-category link repositories."""

from uuid import UUID

from models import Category, ServiceCategory
from repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category

    async def get_by_name(self, name: str) -> Category | None:
        return await self.get_by_field(Category.name, name)

    async def list_categories(self) -> list[Category]:
        return await self.find_all(order_by=[Category.name])


class ServiceCategoryRepository(BaseRepository[ServiceCategory]):
    """Keyed by (service_id, category_id)."""

    model = ServiceCategory

    async def list_links(
        self,
        *,
        service_id: UUID | None = None,
        category_id: UUID | None = None,
    ) -> list[ServiceCategory]:
        conditions = []
        if service_id is not None:
            conditions.append(ServiceCategory.service_id == service_id)
        if category_id is not None:
            conditions.append(ServiceCategory.category_id == category_id)
        return await self.find_all(
            *conditions, order_by=[ServiceCategory.created_at]
        )
