"""Conversation and participant endpoints."""

from uuid import UUID

from fastapi import APIRouter, Request, Response
from starlette import status

from core.ratelimit import WRITE_LIMIT, limiter
from routes.dependencies import ConversationsServiceDep
from schemas import (
    ApiResponse,
    ConversationCreate,
    ConversationResponse,
    ParticipantCreate,
    ParticipantResponse,
)

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ConversationResponse],
    responses={404: {"description": "A participant does not exist"}},
)
@limiter.limit(WRITE_LIMIT)
async def create_conversation(
    request: Request, body: ConversationCreate, service: ConversationsServiceDep
) -> ApiResponse[ConversationResponse]:
    conversation = await service.create_conversation(body)
    return ApiResponse(
        message="Conversation created successfully",
        data=ConversationResponse.model_validate(conversation),
    )


@router.get("", response_model=ApiResponse[list[ConversationResponse]])
async def list_conversations(
    service: ConversationsServiceDep, user_id: UUID | None = None
) -> ApiResponse[list[ConversationResponse]]:
    """List conversations.

    With ``user_id``, only those the user takes part in, each carrying the
    user's ``unread_count``.
    """
    conversations = await service.list_conversations(user_id)
    return ApiResponse(
        message="Conversations retrieved successfully", data=conversations
    )


@router.get("/{conversation_id}", response_model=ApiResponse[ConversationResponse])
async def get_conversation(
    conversation_id: UUID, service: ConversationsServiceDep
) -> ApiResponse[ConversationResponse]:
    conversation = await service.get_conversation(conversation_id)
    return ApiResponse(
        message="Conversation retrieved successfully",
        data=ConversationResponse.model_validate(conversation),
    )


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: UUID, service: ConversationsServiceDep
) -> Response:
    await service.delete_conversation(conversation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{conversation_id}/participants",
    response_model=ApiResponse[list[ParticipantResponse]],
)
async def list_participants(
    conversation_id: UUID, service: ConversationsServiceDep
) -> ApiResponse[list[ParticipantResponse]]:
    participants = await service.list_participants(conversation_id)
    return ApiResponse(
        message="Participants retrieved successfully",
        data=[ParticipantResponse.model_validate(p) for p in participants],
    )


@router.post(
    "/{conversation_id}/participants",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ParticipantResponse],
    responses={409: {"description": "User is already a participant"}},
)
@limiter.limit(WRITE_LIMIT)
async def add_participant(
    request: Request,
    conversation_id: UUID,
    body: ParticipantCreate,
    service: ConversationsServiceDep,
) -> ApiResponse[ParticipantResponse]:
    participant = await service.add_participant(conversation_id, body)
    return ApiResponse(
        message="Participant added successfully",
        data=ParticipantResponse.model_validate(participant),
    )


@router.delete(
    "/{conversation_id}/participants/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_participant(
    conversation_id: UUID, user_id: UUID, service: ConversationsServiceDep
) -> Response:
    await service.remove_participant(conversation_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
