"""Unit tests for CatalogService."""

import uuid
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from core.errors import BusinessRuleError, ForbiddenError, NotFoundError
from schemas import ServiceCreate, ServiceFilters, ServiceUpdate
from services.catalog_service import CatalogService


def _service_create(freelancer_id: uuid.UUID) -> ServiceCreate:
    return ServiceCreate(
        freelancer_id=freelancer_id,
        title="Smart contract audit",
        description="Manual review of Solidity contracts",
        base_price=Decimal("500.00"),
        delivery_time_days=5,
    )


@pytest.fixture
def repos():
    return AsyncMock(), AsyncMock()


@pytest.mark.unit
class TestCreateService:
    async def test_freelancer_can_publish(self, repos):
        services, users = repos
        owner = SimpleNamespace(id=uuid.uuid4(), is_freelancer=True)
        users.get_by_id.return_value = owner
        services.create.return_value = SimpleNamespace(
            id=uuid.uuid4(), freelancer_id=owner.id
        )

        await CatalogService(services, users).create_service(_service_create(owner.id))

        services.create.assert_awaited_once()
        assert services.create.call_args.kwargs["freelancer_id"] == owner.id

    async def test_non_freelancer_is_forbidden(self, repos):
        services, users = repos
        owner = SimpleNamespace(id=uuid.uuid4(), is_freelancer=False)
        users.get_by_id.return_value = owner

        with pytest.raises(ForbiddenError):
            await CatalogService(services, users).create_service(
                _service_create(owner.id)
            )

        services.create.assert_not_awaited()

    async def test_unknown_owner_is_not_found(self, repos):
        services, users = repos
        users.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await CatalogService(services, users).create_service(
                _service_create(uuid.uuid4())
            )

        assert exc_info.value.entity == "User"


@pytest.mark.unit
class TestListServices:
    async def test_inverted_price_range_is_rejected(self, repos):
        services, users = repos
        filters = ServiceFilters(min_price=Decimal("100"), max_price=Decimal("10"))

        with pytest.raises(BusinessRuleError):
            await CatalogService(services, users).list_services(filters)

        services.list_services.assert_not_awaited()

    async def test_filters_are_forwarded(self, repos):
        services, users = repos
        services.list_services.return_value = []
        freelancer_id = uuid.uuid4()

        await CatalogService(services, users).list_services(
            ServiceFilters(freelancer_id=freelancer_id, keyword="audit")
        )

        services.list_services.assert_awaited_once_with(
            freelancer_id=freelancer_id,
            is_active=None,
            min_price=None,
            max_price=None,
            keyword="audit",
        )


@pytest.mark.unit
class TestUpdateService:
    async def test_missing_service_is_not_found(self, repos):
        services, users = repos
        services.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await CatalogService(services, users).update_service(
                uuid.uuid4(), ServiceUpdate(title="New")
            )

        assert exc_info.value.entity == "Service"
