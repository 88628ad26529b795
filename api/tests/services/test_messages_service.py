"""Unit tests for MessagesService."""

import uuid
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from core.errors import NotFoundError
from schemas import MessageCreate
from services.messages_service import MessagesService


@pytest.fixture
def repos():
    return AsyncMock(), AsyncMock(), AsyncMock()


@pytest.mark.unit
class TestSendMessage:
    async def test_updates_conversation_last_message_at(self, repos):
        messages, conversations, users = repos
        conversation = SimpleNamespace(id=uuid.uuid4())
        sender = SimpleNamespace(id=uuid.uuid4())
        sent_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        conversations.get_by_id.return_value = conversation
        users.get_by_id.return_value = sender
        messages.create.return_value = SimpleNamespace(
            id=uuid.uuid4(), content="hello", created_at=sent_at
        )

        await MessagesService(messages, conversations, users).send_message(
            MessageCreate(
                conversation_id=conversation.id, sender_id=sender.id, content="hello"
            )
        )

        conversations.touch_last_message.assert_awaited_once_with(
            conversation, sent_at
        )

    async def test_unknown_conversation_is_not_found(self, repos):
        messages, conversations, users = repos
        conversations.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await MessagesService(messages, conversations, users).send_message(
                MessageCreate(
                    conversation_id=uuid.uuid4(), sender_id=uuid.uuid4(), content="hi"
                )
            )

        assert exc_info.value.entity == "Conversation"
        messages.create.assert_not_awaited()


@pytest.mark.unit
class TestReadingMessages:
    async def test_listing_unknown_conversation_is_empty(self, repos):
        """Listing never 404s; the conversation is not looked up."""
        messages, conversations, users = repos
        messages.list_by_conversation.return_value = []

        result = await MessagesService(
            messages, conversations, users
        ).list_by_conversation(uuid.uuid4())

        assert result == []
        conversations.get_by_id.assert_not_awaited()

    async def test_get_missing_message_is_not_found(self, repos):
        messages, conversations, users = repos
        messages.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await MessagesService(messages, conversations, users).get_message(
                uuid.uuid4()
            )

        assert exc_info.value.entity == "Message"

    async def test_mark_conversation_read_requires_reader(self, repos):
        messages, conversations, users = repos
        conversations.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        users.get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await MessagesService(
                messages, conversations, users
            ).mark_conversation_read(uuid.uuid4(), uuid.uuid4())

        assert exc_info.value.entity == "User"
        messages.mark_conversation_read.assert_not_awaited()

    async def test_mark_conversation_read_returns_count(self, repos):
        messages, conversations, users = repos
        conversations.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        users.get_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        messages.mark_conversation_read.return_value = 3

        updated = await MessagesService(
            messages, conversations, users
        ).mark_conversation_read(uuid.uuid4(), uuid.uuid4())

        assert updated == 3
