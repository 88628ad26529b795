"""Integration tests for the error envelope and response headers."""

import pytest

pytestmark = pytest.mark.integration


class TestErrorEnvelope:
    async def test_unknown_route_uses_envelope(self, client):
        response = await client.get("/no-such-thing")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Not Found",
            "code": "NOT_FOUND",
        }

    async def test_malformed_json_is_validation_error(self, client):
        response = await client.post(
            "/users",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_security_headers_present(self, client):
        response = await client.get("/users")

        assert response.headers["x-frame-options"] == "DENY"
        assert "default-src 'none'" in response.headers["content-security-policy"]
        assert response.headers["x-request-id"]

    async def test_request_ids_are_unique(self, client):
        first = await client.get("/health")
        second = await client.get("/health")

        assert first.headers["x-request-id"] != second.headers["x-request-id"]
