"""Endpoints for the services freelancers offer."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import CatalogServiceDep
from schemas import (
    ApiResponse,
    ServiceCreate,
    ServiceFilters,
    ServiceResponse,
    ServiceUpdate,
)

router = APIRouter(prefix="/services", tags=["services"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ServiceResponse],
    responses={
        403: {"description": "User is not a freelancer"},
        404: {"description": "Freelancer not found"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def create_service(
    request: Request, body: ServiceCreate, catalog: CatalogServiceDep
) -> ApiResponse[ServiceResponse]:
    service = await catalog.create_service(body)
    return ApiResponse(
        message="Service created successfully",
        data=ServiceResponse.model_validate(service),
    )


@router.get("", response_model=ApiResponse[list[ServiceResponse]])
async def list_services(
    filters: Annotated[ServiceFilters, Query()], catalog: CatalogServiceDep
) -> ApiResponse[list[ServiceResponse]]:
    """List services, newest first.

    ``keyword`` matches title or description case-insensitively; price bounds
    are inclusive.
    """
    services = await catalog.list_services(filters)
    return ApiResponse(
        message="Services retrieved successfully",
        data=[ServiceResponse.model_validate(s) for s in services],
    )


@router.get(
    "/{service_id}",
    response_model=ApiResponse[ServiceResponse],
    responses={404: {"description": "Service not found"}},
)
async def get_service(
    service_id: UUID, catalog: CatalogServiceDep
) -> ApiResponse[ServiceResponse]:
    service = await catalog.get_service(service_id)
    return ApiResponse(
        message="Service retrieved successfully",
        data=ServiceResponse.model_validate(service),
    )


@router.patch("/{service_id}", response_model=ApiResponse[ServiceResponse])
async def update_service(
    service_id: UUID, body: ServiceUpdate, catalog: CatalogServiceDep
) -> ApiResponse[ServiceResponse]:
    service = await catalog.update_service(service_id, body)
    return ApiResponse(
        message="Service updated successfully",
        data=ServiceResponse.model_validate(service),
    )


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(service_id: UUID, catalog: CatalogServiceDep) -> Response:
    await catalog.delete_service(service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
