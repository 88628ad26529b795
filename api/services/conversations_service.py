"""Conversations and their participants."""

from uuid import UUID

from core.errors import ConflictError, NotFoundError
from core.logger import get_logger
from models import Conversation, ConversationParticipant
from repositories.conversation_repository import (
    ConversationParticipantRepository,
    ConversationRepository,
)
from repositories.message_repository import MessageRepository
from repositories.user_repository import UserRepository
from schemas import ConversationCreate, ConversationResponse, ParticipantCreate
from services.common import delete_or_raise, get_or_raise

logger = get_logger(__name__)


class ConversationsService:
    def __init__(
        self,
        conversations: ConversationRepository,
        participants: ConversationParticipantRepository,
        users: UserRepository,
        messages: MessageRepository,
    ):
        self.conversations = conversations
        self.participants = participants
        self.users = users
        self.messages = messages

    async def create_conversation(self, data: ConversationCreate) -> Conversation:
        """Open a conversation, optionally seeding its participants.

        Duplicate participant ids collapse to one; every id must be a known user.
        """
        participant_ids = list(dict.fromkeys(data.participant_ids))
        if participant_ids:
            found = {u.id for u in await self.users.get_many_by_ids(participant_ids)}
            missing = [uid for uid in participant_ids if uid not in found]
            if missing:
                raise NotFoundError("User", str(missing[0]))

        conversation = await self.conversations.create()
        for user_id in participant_ids:
            await self.participants.create(
                conversation_id=conversation.id, user_id=user_id
            )

        logger.info(
            "conversation.created",
            conversation_id=str(conversation.id),
            participants=len(participant_ids),
        )
        return conversation

    async def list_conversations(
        self, user_id: UUID | None = None
    ) -> list[ConversationResponse]:
        """List conversations, with per-user unread counts when ``user_id`` is given.

        The count covers messages from the other participants that are still
        unread; the user's own messages never count.
        """
        conversations = await self.conversations.list_conversations(user_id=user_id)
        if user_id is None:
            return [ConversationResponse.model_validate(c) for c in conversations]

        unread = await self.messages.count_unread_by_conversation(
            [c.id for c in conversations], user_id
        )
        return [
            ConversationResponse.model_validate(c).model_copy(
                update={"unread_count": unread.get(c.id, 0)}
            )
            for c in conversations
        ]

    async def get_conversation(self, conversation_id: UUID) -> Conversation:
        return await get_or_raise(self.conversations, conversation_id, "Conversation")

    async def delete_conversation(self, conversation_id: UUID) -> None:
        await delete_or_raise(self.conversations, conversation_id, "Conversation")
        logger.info("conversation.deleted", conversation_id=str(conversation_id))

    async def list_participants(
        self, conversation_id: UUID
    ) -> list[ConversationParticipant]:
        await get_or_raise(self.conversations, conversation_id, "Conversation")
        return await self.participants.list_for_conversation(conversation_id)

    async def add_participant(
        self, conversation_id: UUID, data: ParticipantCreate
    ) -> ConversationParticipant:
        await get_or_raise(self.conversations, conversation_id, "Conversation")
        await get_or_raise(self.users, data.user_id, "User")
        if await self.participants.exists((conversation_id, data.user_id)):
            raise ConflictError("User is already a participant")
        return await self.participants.create(
            conversation_id=conversation_id, user_id=data.user_id
        )

    async def remove_participant(self, conversation_id: UUID, user_id: UUID) -> None:
        await get_or_raise(self.conversations, conversation_id, "Conversation")
        await get_or_raise(self.users, user_id, "User")
        await delete_or_raise(
            self.participants, (conversation_id, user_id), "ConversationParticipant"
        )
