"""Integration tests for /conversations and /messages."""

import uuid

import pytest

pytestmark = pytest.mark.integration


async def _send(client, conversation_id: str, sender_id: str, content: str) -> dict:
    response = await client.post(
        "/messages",
        json={
            "conversation_id": conversation_id,
            "sender_id": sender_id,
            "content": content,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestConversations:
    async def test_create_with_participants(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        bob = await create_user()

        conversation = await create_conversation(alice["id"], bob["id"], alice["id"])
        response = await client.get(
            f"/conversations/{conversation['id']}/participants"
        )

        assert conversation["last_message_at"] is None
        participants = response.json()["data"]
        assert {p["user_id"] for p in participants} == {alice["id"], bob["id"]}

    async def test_unknown_participant_returns_404(self, client, create_user):
        alice = await create_user()

        response = await client.post(
            "/conversations",
            json={"participant_ids": [alice["id"], str(uuid.uuid4())]},
        )

        assert response.status_code == 404
        assert response.json()["details"]["entity"] == "User"
        assert (await client.get("/conversations")).json()["data"] == []

    async def test_list_filters_by_user(self, client, create_user, create_conversation):
        alice = await create_user()
        bob = await create_user()
        mine = await create_conversation(alice["id"])
        await create_conversation(bob["id"])

        response = await client.get("/conversations", params={"user_id": alice["id"]})

        assert [c["id"] for c in response.json()["data"]] == [mine["id"]]

    async def test_user_listing_reports_unread_count(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        bob = await create_user()
        conversation = await create_conversation(alice["id"], bob["id"])
        await _send(client, conversation["id"], bob["id"], "one")
        await _send(client, conversation["id"], bob["id"], "two")
        await _send(client, conversation["id"], alice["id"], "three")

        for_alice = await client.get("/conversations", params={"user_id": alice["id"]})
        for_bob = await client.get("/conversations", params={"user_id": bob["id"]})
        unfiltered = await client.get("/conversations")
        await client.post(
            f"/messages/conversation/{conversation['id']}/read",
            json={"user_id": alice["id"]},
        )
        after_read = await client.get("/conversations", params={"user_id": alice["id"]})

        assert for_alice.json()["data"][0]["unread_count"] == 2
        assert for_bob.json()["data"][0]["unread_count"] == 1
        assert unfiltered.json()["data"][0]["unread_count"] is None
        assert after_read.json()["data"][0]["unread_count"] == 0

    async def test_participant_add_remove(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        bob = await create_user()
        conversation = await create_conversation(alice["id"])
        base = f"/conversations/{conversation['id']}/participants"

        added = await client.post(base, json={"user_id": bob["id"]})
        again = await client.post(base, json={"user_id": bob["id"]})
        removed = await client.delete(f"{base}/{bob['id']}")
        removed_again = await client.delete(f"{base}/{bob['id']}")

        assert added.status_code == 201
        assert again.status_code == 409
        assert removed.status_code == 204
        assert removed_again.status_code == 404
        assert removed_again.json()["details"]["entity"] == "ConversationParticipant"

    async def test_participants_of_unknown_conversation(self, client):
        response = await client.get(f"/conversations/{uuid.uuid4()}/participants")

        assert response.status_code == 404

    async def test_delete_removes_messages(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        conversation = await create_conversation(alice["id"])
        message = await _send(client, conversation["id"], alice["id"], "hi")

        deleted = await client.delete(f"/conversations/{conversation['id']}")

        assert deleted.status_code == 204
        assert (await client.get(f"/messages/{message['id']}")).status_code == 404


class TestMessages:
    async def test_send_updates_last_message_at(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        conversation = await create_conversation(alice["id"])

        message = await _send(client, conversation["id"], alice["id"], "gm")
        refreshed = await client.get(f"/conversations/{conversation['id']}")

        assert message["read_at"] is None
        assert refreshed.json()["data"]["last_message_at"] is not None

    async def test_unknown_conversation_list_is_empty_but_get_is_404(self, client):
        """Listing by conversation never 404s; a single message lookup does."""
        listing = await client.get(f"/messages/conversation/{uuid.uuid4()}")
        single = await client.get(f"/messages/{uuid.uuid4()}")

        assert listing.status_code == 200
        assert listing.json()["data"] == []
        assert single.status_code == 404
        assert single.json()["code"] == "NOT_FOUND"

    async def test_list_is_oldest_first(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        bob = await create_user()
        conversation = await create_conversation(alice["id"], bob["id"])
        first = await _send(client, conversation["id"], alice["id"], "first")
        second = await _send(client, conversation["id"], bob["id"], "second")

        response = await client.get(f"/messages/conversation/{conversation['id']}")

        assert [m["id"] for m in response.json()["data"]] == [
            first["id"],
            second["id"],
        ]

    async def test_send_to_unknown_conversation_returns_404(
        self, client, create_user
    ):
        alice = await create_user()

        response = await client.post(
            "/messages",
            json={
                "conversation_id": str(uuid.uuid4()),
                "sender_id": alice["id"],
                "content": "hello?",
            },
        )

        assert response.status_code == 404
        assert response.json()["details"]["entity"] == "Conversation"

    async def test_empty_content_rejected(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        conversation = await create_conversation(alice["id"])

        response = await client.post(
            "/messages",
            json={
                "conversation_id": conversation["id"],
                "sender_id": alice["id"],
                "content": "   ",
            },
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "content"

    async def test_mark_read(self, client, create_user, create_conversation):
        alice = await create_user()
        conversation = await create_conversation(alice["id"])
        message = await _send(client, conversation["id"], alice["id"], "ping")

        response = await client.patch(f"/messages/{message['id']}/read")

        assert response.status_code == 200
        assert response.json()["data"]["read_at"] is not None

    async def test_mark_conversation_read_skips_readers_own(
        self, client, create_user, create_conversation
    ):
        alice = await create_user()
        bob = await create_user()
        conversation = await create_conversation(alice["id"], bob["id"])
        await _send(client, conversation["id"], bob["id"], "one")
        await _send(client, conversation["id"], bob["id"], "two")
        mine = await _send(client, conversation["id"], alice["id"], "three")

        response = await client.post(
            f"/messages/conversation/{conversation['id']}/read",
            json={"user_id": alice["id"]},
        )
        own = await client.get(f"/messages/{mine['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Messages marked as read"
        assert response.json()["data"] == {"updated": 2}
        assert own.json()["data"]["read_at"] is None

    async def test_delete_message(self, client, create_user, create_conversation):
        alice = await create_user()
        conversation = await create_conversation(alice["id"])
        message = await _send(client, conversation["id"], alice["id"], "oops")

        first = await client.delete(f"/messages/{message['id']}")
        second = await client.delete(f"/messages/{message['id']}")

        assert first.status_code == 204
        assert second.status_code == 404
