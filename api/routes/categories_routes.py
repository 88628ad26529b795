"""Category and service-category endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import CategoriesServiceDep
from schemas import (
    ApiResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ServiceCategoryCreate,
    ServiceCategoryResponse,
)

router = APIRouter(prefix="/categories", tags=["categories"])
links_router = APIRouter(prefix="/service-categories", tags=["categories"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[CategoryResponse],
)
@limiter.limit(WRITE_LIMIT)
async def create_category(
    request: Request, body: CategoryCreate, service: CategoriesServiceDep
) -> ApiResponse[CategoryResponse]:
    category = await service.create_category(body)
    return ApiResponse(
        message="Category created successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.get("", response_model=ApiResponse[list[CategoryResponse]])
async def list_categories(
    service: CategoriesServiceDep,
) -> ApiResponse[list[CategoryResponse]]:
    categories = await service.list_categories()
    return ApiResponse(
        message="Categories retrieved successfully",
        data=[CategoryResponse.model_validate(c) for c in categories],
    )


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def get_category(
    category_id: UUID, service: CategoriesServiceDep
) -> ApiResponse[CategoryResponse]:
    category = await service.get_category(category_id)
    return ApiResponse(
        message="Category retrieved successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.patch("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category(
    category_id: UUID, body: CategoryUpdate, service: CategoriesServiceDep
) -> ApiResponse[CategoryResponse]:
    category = await service.update_category(category_id, body)
    return ApiResponse(
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID, service: CategoriesServiceDep
) -> Response:
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@links_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ServiceCategoryResponse],
    responses={409: {"description": "Service already in category"}},
)
@limiter.limit(WRITE_LIMIT)
async def link_service_category(
    request: Request, body: ServiceCategoryCreate, service: CategoriesServiceDep
) -> ApiResponse[ServiceCategoryResponse]:
    link = await service.link_service(body)
    return ApiResponse(
        message="Service added to category",
        data=ServiceCategoryResponse.model_validate(link),
    )


@links_router.get("", response_model=ApiResponse[list[ServiceCategoryResponse]])
async def list_service_categories(
    service: CategoriesServiceDep,
    service_id: UUID | None = None,
    category_id: UUID | None = None,
) -> ApiResponse[list[ServiceCategoryResponse]]:
    links = await service.list_links(service_id=service_id, category_id=category_id)
    return ApiResponse(
        message="Service categories retrieved successfully",
        data=[ServiceCategoryResponse.model_validate(link) for link in links],
    )


@links_router.get(
    "/{service_id}/{category_id}",
    response_model=ApiResponse[ServiceCategoryResponse],
)
async def get_service_category(
    service_id: UUID, category_id: UUID, service: CategoriesServiceDep
) -> ApiResponse[ServiceCategoryResponse]:
    link = await service.get_link(service_id, category_id)
    return ApiResponse(
        message="Service category retrieved successfully",
        data=ServiceCategoryResponse.model_validate(link),
    )


@links_router.delete(
    "/{service_id}/{category_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def unlink_service_category(
    service_id: UUID, category_id: UUID, service: CategoriesServiceDep
) -> Response:
    await service.unlink_service(service_id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
