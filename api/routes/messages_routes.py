"""Message endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import MessagesServiceDep
from schemas import (
    ApiResponse,
    MarkConversationReadRequest,
    MarkReadResult,
    MessageCreate,
    MessageResponse,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[MessageResponse],
    responses={404: {"description": "Conversation or sender not found"}},
)
@limiter.limit(WRITE_LIMIT)
async def send_message(
    request: Request, body: MessageCreate, service: MessagesServiceDep
) -> ApiResponse[MessageResponse]:
    message = await service.send_message(body)
    return ApiResponse(
        message="Message sent successfully",
        data=MessageResponse.model_validate(message),
    )


@router.get(
    "/conversation/{conversation_id}",
    response_model=ApiResponse[list[MessageResponse]],
)
async def list_conversation_messages(
    conversation_id: UUID, service: MessagesServiceDep
) -> ApiResponse[list[MessageResponse]]:
    """Messages oldest first. An unknown conversation returns an empty list."""
    messages = await service.list_by_conversation(conversation_id)
    return ApiResponse(
        message="Messages retrieved successfully",
        data=[MessageResponse.model_validate(m) for m in messages],
    )


@router.post(
    "/conversation/{conversation_id}/read",
    response_model=ApiResponse[MarkReadResult],
)
@limiter.limit(WRITE_LIMIT)
async def mark_conversation_read(
    request: Request,
    conversation_id: UUID,
    body: MarkConversationReadRequest,
    service: MessagesServiceDep,
) -> ApiResponse[MarkReadResult]:
    """Mark every message the reader did not send as read."""
    updated = await service.mark_conversation_read(conversation_id, body.user_id)
    return ApiResponse(
        message="Messages marked as read", data=MarkReadResult(updated=updated)
    )


@router.get(
    "/{message_id}",
    response_model=ApiResponse[MessageResponse],
    responses={404: {"description": "Message not found"}},
)
async def get_message(
    message_id: UUID, service: MessagesServiceDep
) -> ApiResponse[MessageResponse]:
    message = await service.get_message(message_id)
    return ApiResponse(
        message="Message retrieved successfully",
        data=MessageResponse.model_validate(message),
    )


@router.patch("/{message_id}/read", response_model=ApiResponse[MessageResponse])
async def mark_message_read(
    message_id: UUID, service: MessagesServiceDep
) -> ApiResponse[MessageResponse]:
    message = await service.mark_read(message_id)
    return ApiResponse(
        message="Message marked as read",
        data=MessageResponse.model_validate(message),
    )


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: UUID, service: MessagesServiceDep) -> Response:
    await service.delete_message(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
