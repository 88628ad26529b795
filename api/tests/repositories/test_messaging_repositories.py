"""Tests for conversation, participant and message repositories."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.conversation_repository import (
    ConversationParticipantRepository,
    ConversationRepository,
)
from repositories.message_repository import MessageRepository
from tests.factories import (
    ConversationFactory,
    ConversationParticipantFactory,
    MessageFactory,
    UserFactory,
    create_async,
)

pytestmark = pytest.mark.integration


@pytest.fixture
async def thread(db_session: AsyncSession):
    """A conversation between two users."""
    alice = await create_async(UserFactory, db_session)
    bob = await create_async(UserFactory, db_session)
    conversation = await create_async(ConversationFactory, db_session)
    for user in (alice, bob):
        await create_async(
            ConversationParticipantFactory,
            db_session,
            conversation_id=conversation.id,
            user_id=user.id,
        )
    return conversation, alice, bob


class TestListConversations:
    async def test_filters_by_participant(self, db_session: AsyncSession, thread):
        conversation, alice, _ = thread
        outsider = await create_async(UserFactory, db_session)
        await create_async(ConversationFactory, db_session)
        repo = ConversationRepository(db_session)

        mine = await repo.list_conversations(user_id=alice.id)
        theirs = await repo.list_conversations(user_id=outsider.id)
        everything = await repo.list_conversations()

        assert [c.id for c in mine] == [conversation.id]
        assert theirs == []
        assert len(everything) == 2

    async def test_touch_last_message(self, db_session: AsyncSession, thread):
        conversation, _, _ = thread
        at = datetime.now(UTC)

        result = await ConversationRepository(db_session).touch_last_message(
            conversation, at
        )

        assert result.last_message_at is not None


class TestParticipants:
    async def test_list_for_conversation(self, db_session: AsyncSession, thread):
        conversation, alice, bob = thread

        participants = await ConversationParticipantRepository(
            db_session
        ).list_for_conversation(conversation.id)

        assert {p.user_id for p in participants} == {alice.id, bob.id}


class TestListByConversation:
    async def test_oldest_first(self, db_session: AsyncSession, thread):
        conversation, alice, bob = thread
        now = datetime.now(UTC)
        later = await create_async(
            MessageFactory,
            db_session,
            conversation_id=conversation.id,
            sender_id=bob.id,
            created_at=now,
        )
        earlier = await create_async(
            MessageFactory,
            db_session,
            conversation_id=conversation.id,
            sender_id=alice.id,
            created_at=now - timedelta(minutes=5),
        )

        result = await MessageRepository(db_session).list_by_conversation(
            conversation.id
        )

        assert [m.id for m in result] == [earlier.id, later.id]

    async def test_empty_conversation_returns_empty_list(
        self, db_session: AsyncSession, thread
    ):
        conversation, _, _ = thread

        result = await MessageRepository(db_session).list_by_conversation(
            conversation.id
        )

        assert result == []


class TestMarkRead:
    async def test_sets_read_at_once(self, db_session: AsyncSession, thread):
        """Marking an already-read message keeps the first timestamp."""
        conversation, alice, _ = thread
        message = await create_async(
            MessageFactory,
            db_session,
            conversation_id=conversation.id,
            sender_id=alice.id,
        )
        repo = MessageRepository(db_session)

        first = await repo.mark_read(message)
        stamped = first.read_at
        second = await repo.mark_read(first)

        assert stamped is not None
        assert second.read_at == stamped

    async def test_conversation_read_skips_own_messages(
        self, db_session: AsyncSession, thread
    ):
        """Only messages sent by others are marked for the reader."""
        conversation, alice, bob = thread
        from_bob = await create_async(
            MessageFactory,
            db_session,
            conversation_id=conversation.id,
            sender_id=bob.id,
        )
        from_alice = await create_async(
            MessageFactory,
            db_session,
            conversation_id=conversation.id,
            sender_id=alice.id,
        )
        repo = MessageRepository(db_session)

        updated = await repo.mark_conversation_read(conversation.id, alice.id)
        again = await repo.mark_conversation_read(conversation.id, alice.id)

        assert updated == 1
        assert again == 0
        db_session.expunge_all()
        assert (await repo.get_by_id(from_bob.id)).read_at is not None
        assert (await repo.get_by_id(from_alice.id)).read_at is None


class TestCountUnread:
    async def test_counts_only_others_unread_messages(
        self, db_session: AsyncSession, thread
    ):
        conversation, alice, bob = thread
        quiet = await create_async(ConversationFactory, db_session)
        for sender, read_at in (
            (bob, None),
            (bob, None),
            (bob, datetime.now(UTC)),
            (alice, None),
        ):
            await create_async(
                MessageFactory,
                db_session,
                conversation_id=conversation.id,
                sender_id=sender.id,
                read_at=read_at,
            )

        counts = await MessageRepository(db_session).count_unread_by_conversation(
            [conversation.id, quiet.id], alice.id
        )

        assert counts == {conversation.id: 2}

    async def test_no_conversations_skips_query(self, db_session: AsyncSession):
        reader = await create_async(UserFactory, db_session)

        counts = await MessageRepository(db_session).count_unread_by_conversation(
            [], reader.id
        )

        assert counts == {}
