"""Messages within conversations."""

from uuid import UUID

from core.logger import get_logger
from models import Message
from repositories.conversation_repository import ConversationRepository
from repositories.message_repository import MessageRepository
from repositories.user_repository import UserRepository
from schemas import MessageCreate
from services.common import delete_or_raise, get_or_raise

logger = get_logger(__name__)


class MessagesService:
    def __init__(
        self,
        messages: MessageRepository,
        conversations: ConversationRepository,
        users: UserRepository,
    ):
        self.messages = messages
        self.conversations = conversations
        self.users = users

    async def send_message(self, data: MessageCreate) -> Message:
        conversation = await get_or_raise(
            self.conversations, data.conversation_id, "Conversation"
        )
        await get_or_raise(self.users, data.sender_id, "User")

        message = await self.messages.create(**data.model_dump())
        await self.conversations.touch_last_message(conversation, message.created_at)

        logger.info(
            "message.sent",
            message_id=str(message.id),
            conversation_id=str(conversation.id),
            content_length=len(message.content),
        )
        return message

    async def list_by_conversation(self, conversation_id: UUID) -> list[Message]:
        """An unknown conversation yields an empty list rather than a 404."""
        return await self.messages.list_by_conversation(conversation_id)

    async def get_message(self, message_id: UUID) -> Message:
        return await get_or_raise(self.messages, message_id, "Message")

    async def mark_read(self, message_id: UUID) -> Message:
        message = await get_or_raise(self.messages, message_id, "Message")
        return await self.messages.mark_read(message)

    async def mark_conversation_read(
        self, conversation_id: UUID, reader_id: UUID
    ) -> int:
        await get_or_raise(self.conversations, conversation_id, "Conversation")
        await get_or_raise(self.users, reader_id, "User")
        updated = await self.messages.mark_conversation_read(conversation_id, reader_id)
        logger.debug(
            "conversation.marked_read",
            conversation_id=str(conversation_id),
            reader_id=str(reader_id),
            updated=updated,
        )
        return updated

    async def delete_message(self, message_id: UUID) -> None:
        await delete_or_raise(self.messages, message_id, "Message")
