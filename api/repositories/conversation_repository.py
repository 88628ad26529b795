"""Conversation and participant repositories."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select

from models import Conversation, ConversationParticipant
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class ConversationRepository(BaseRepository[Conversation]):
    model = Conversation

    @log_slow_query("list_conversations")
    async def list_conversations(
        self, *, user_id: UUID | None = None
    ) -> list[Conversation]:
        """All conversations, or only those the user participates in."""
        conditions = []
        if user_id is not None:
            conditions.append(
                Conversation.id.in_(
                    select(ConversationParticipant.conversation_id).where(
                        ConversationParticipant.user_id == user_id
                    )
                )
            )
        return await self.find_all(
            *conditions, order_by=[Conversation.updated_at.desc()]
        )

    async def touch_last_message(
        self, conversation: Conversation, at: datetime
    ) -> Conversation:
        return await self.update(conversation, {"last_message_at": at})


class ConversationParticipantRepository(BaseRepository[ConversationParticipant]):
    """Keyed by (conversation_id, user_id)."""

    model = ConversationParticipant

    async def list_for_conversation(
        self, conversation_id: UUID
    ) -> list[ConversationParticipant]:
        return await self.find_all(
            ConversationParticipant.conversation_id == conversation_id,
            order_by=[ConversationParticipant.joined_at],
        )
