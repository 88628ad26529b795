"""Message repository."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select, update

from models import Message
from repositories.base import BaseRepository
from repositories.utils import log_slow_query


class MessageRepository(BaseRepository[Message]):
    model = Message

    @log_slow_query("list_messages_by_conversation")
    async def list_by_conversation(self, conversation_id: UUID) -> list[Message]:
        """Messages in a conversation, oldest first. Empty list if none."""
        return await self.find_all(
            Message.conversation_id == conversation_id,
            order_by=[Message.created_at],
        )

    async def mark_read(self, message: Message) -> Message:
        """Stamp read_at once; an already-read message keeps its timestamp."""
        if message.read_at is not None:
            return message
        return await self.update(message, {"read_at": datetime.now(UTC)})

    async def mark_conversation_read(
        self, conversation_id: UUID, reader_id: UUID
    ) -> int:
        """Mark every unread message not sent by ``reader_id`` as read.

        Returns the number of messages updated.
        """
        result = await self.db.execute(
            update(Message)
            .where(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                Message.read_at.is_(None),
            )
            .values(read_at=datetime.now(UTC))
        )
        return result.rowcount

    async def count_unread_by_conversation(
        self, conversation_ids: list[UUID], reader_id: UUID
    ) -> dict[UUID, int]:
        """Unread messages not sent by ``reader_id``, per conversation.

        Conversations with nothing unread are absent from the result.
        """
        if not conversation_ids:
            return {}
        result = await self.db.execute(
            select(Message.conversation_id, func.count())
            .where(
                Message.conversation_id.in_(conversation_ids),
                Message.sender_id != reader_id,
                Message.read_at.is_(None),
            )
            .group_by(Message.conversation_id)
        )
        return {conversation_id: count for conversation_id, count in result.all()}
