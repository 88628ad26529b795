"""Route test configuration: rate limiter off, plus helpers that create
resources through the API."""

import uuid
from unittest.mock import patch

import pytest
from httpx import AsyncClient

from tests.factories import eth_address


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable slowapi rate limiting so route handlers can be called directly."""
    with patch("core.ratelimit.limiter.enabled", False):
        yield


async def _post(client: AsyncClient, path: str, payload: dict) -> dict:
    response = await client.post(path, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def create_user(client: AsyncClient):
    """POST /users with a fresh wallet and username; returns the user data."""

    async def _create(**overrides) -> dict:
        payload = {
            "wallet_address": eth_address(),
            "username": f"user_{uuid.uuid4().hex[:12]}",
        }
        payload.update(overrides)
        return await _post(client, "/users", payload)

    return _create


@pytest.fixture
def create_service(client: AsyncClient):
    async def _create(freelancer_id: str, **overrides) -> dict:
        payload = {
            "freelancer_id": freelancer_id,
            "title": "Smart contract audit",
            "description": "Line-by-line review of Solidity code",
            "base_price": "500.00",
            "delivery_time_days": 5,
        }
        payload.update(overrides)
        return await _post(client, "/services", payload)

    return _create


@pytest.fixture
def create_conversation(client: AsyncClient):
    async def _create(*participant_ids: str) -> dict:
        return await _post(
            client, "/conversations", {"participant_ids": list(participant_ids)}
        )

    return _create
