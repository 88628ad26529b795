"""Service request endpoints: clients asking freelancers for work."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from models import ServiceRequestStatus
from routes.dependencies import ServiceRequestsServiceDep
from schemas import (
    ApiResponse,
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestStatusUpdate,
)

router = APIRouter(prefix="/service-requests", tags=["service-requests"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ServiceRequestResponse],
    responses={
        403: {"description": "Client owns the service"},
        404: {"description": "Service or client not found"},
        409: {"description": "Client already has a pending request"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def create_service_request(
    request: Request, body: ServiceRequestCreate, service: ServiceRequestsServiceDep
) -> ApiResponse[ServiceRequestResponse]:
    service_request = await service.create_request(body)
    return ApiResponse(
        message="Service request created successfully",
        data=ServiceRequestResponse.model_validate(service_request),
    )


@router.get("", response_model=ApiResponse[list[ServiceRequestResponse]])
async def list_service_requests(
    service: ServiceRequestsServiceDep,
    service_id: UUID | None = None,
    client_id: UUID | None = None,
    status: ServiceRequestStatus | None = None,
) -> ApiResponse[list[ServiceRequestResponse]]:
    requests = await service.list_requests(
        service_id=service_id, client_id=client_id, status=status
    )
    return ApiResponse(
        message="Service requests retrieved successfully",
        data=[ServiceRequestResponse.model_validate(r) for r in requests],
    )


@router.get(
    "/freelancer/{freelancer_id}",
    response_model=ApiResponse[list[ServiceRequestResponse]],
    responses={404: {"description": "Freelancer not found"}},
)
async def list_requests_for_freelancer(
    freelancer_id: UUID, service: ServiceRequestsServiceDep
) -> ApiResponse[list[ServiceRequestResponse]]:
    """Requests made against any of the freelancer's services, newest first."""
    requests = await service.list_for_freelancer(freelancer_id)
    return ApiResponse(
        message="Service requests retrieved successfully",
        data=[ServiceRequestResponse.model_validate(r) for r in requests],
    )


@router.get(
    "/{request_id}",
    response_model=ApiResponse[ServiceRequestResponse],
    responses={404: {"description": "Service request not found"}},
)
async def get_service_request(
    request_id: UUID, service: ServiceRequestsServiceDep
) -> ApiResponse[ServiceRequestResponse]:
    service_request = await service.get_request(request_id)
    return ApiResponse(
        message="Service request retrieved successfully",
        data=ServiceRequestResponse.model_validate(service_request),
    )


@router.patch(
    "/{request_id}/status",
    response_model=ApiResponse[ServiceRequestResponse],
    responses={
        403: {"description": "Freelancer does not own the service"},
        409: {"description": "Request has already been answered"},
    },
)
async def answer_service_request(
    request_id: UUID,
    body: ServiceRequestStatusUpdate,
    service: ServiceRequestsServiceDep,
) -> ApiResponse[ServiceRequestResponse]:
    service_request = await service.answer_request(request_id, body)
    return ApiResponse(
        message=f"Service request {service_request.status.value} successfully",
        data=ServiceRequestResponse.model_validate(service_request),
    )


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service_request(
    request_id: UUID, service: ServiceRequestsServiceDep
) -> Response:
    await service.delete_request(request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
