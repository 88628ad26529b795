"""Transaction endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from models import TransactionStatus, TransactionType
from routes.dependencies import TransactionsServiceDep
from schemas import (
    ApiResponse,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[TransactionResponse],
    responses={
        400: {"description": "Sender and recipient are the same user"},
        404: {"description": "Sender or recipient not found"},
        409: {"description": "Transaction hash already recorded"},
    },
)
@limiter.limit(WRITE_LIMIT)
async def create_transaction(
    request: Request, body: TransactionCreate, service: TransactionsServiceDep
) -> ApiResponse[TransactionResponse]:
    transaction = await service.create_transaction(body)
    return ApiResponse(
        message="Transaction created successfully",
        data=TransactionResponse.model_validate(transaction),
    )


@router.get("", response_model=ApiResponse[list[TransactionResponse]])
async def list_transactions(
    service: TransactionsServiceDep,
    user_id: UUID | None = None,
    status: TransactionStatus | None = None,
    type: TransactionType | None = None,
) -> ApiResponse[list[TransactionResponse]]:
    """List transactions; ``user_id`` matches either sender or recipient."""
    transactions = await service.list_transactions(
        user_id=user_id, status=status, type=type
    )
    return ApiResponse(
        message="Transactions retrieved successfully",
        data=[TransactionResponse.model_validate(t) for t in transactions],
    )


@router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def get_transaction(
    transaction_id: UUID, service: TransactionsServiceDep
) -> ApiResponse[TransactionResponse]:
    transaction = await service.get_transaction(transaction_id)
    return ApiResponse(
        message="Transaction retrieved successfully",
        data=TransactionResponse.model_validate(transaction),
    )


@router.patch(
    "/{transaction_id}",
    response_model=ApiResponse[TransactionResponse],
    responses={409: {"description": "Status transition not allowed"}},
)
async def update_transaction(
    transaction_id: UUID, body: TransactionUpdate, service: TransactionsServiceDep
) -> ApiResponse[TransactionResponse]:
    transaction = await service.update_transaction(transaction_id, body)
    return ApiResponse(
        message="Transaction updated successfully",
        data=TransactionResponse.model_validate(transaction),
    )


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: UUID, service: TransactionsServiceDep
) -> Response:
    await service.delete_transaction(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
