"""Unit tests for the rate limit exceeded handler."""

import json
from unittest.mock import MagicMock

import pytest

from core.ratelimit import rate_limit_exceeded_handler


@pytest.mark.unit
class TestRateLimitExceededHandler:
    def test_returns_429_envelope(self):
        request = MagicMock()
        request.client.host = "203.0.113.9"
        request.headers = {}
        exc = MagicMock()
        exc.detail = "60 per 1 minute"
        exc.retry_after = 42

        response = rate_limit_exceeded_handler(request, exc)

        assert response.status_code == 429
        assert response.headers["retry-after"] == "42"
        assert json.loads(response.body) == {
            "success": False,
            "message": "Rate limit exceeded. Please slow down.",
            "code": "RATE_LIMITED",
            "retry_after": "60 per 1 minute",
        }
