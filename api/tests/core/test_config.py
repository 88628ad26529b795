"""Unit tests for core.config module.

Tests cover:
- Settings model_validator database requirement
- is_sqlite property
- allowed_origins computed property with deduplication
- get_settings / clear_settings_cache lru_cache behavior
"""

import pytest
from pydantic import ValidationError

from core.config import Settings, clear_settings_cache, get_settings

PG_URL = "postgresql+asyncpg://localhost/offer_hub"


@pytest.fixture(autouse=True)
def _clear_settings():
    """Clear lru_cache between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# ---------------------------------------------------------------------------
# Settings validation
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSettingsValidation:
    def test_requires_database_url(self):
        with pytest.raises(ValidationError, match="Database configuration"):
            Settings(database_url="")

    def test_defaults(self):
        settings = Settings(database_url=PG_URL)

        assert settings.environment in {"development", "test"}
        assert settings.write_rate_limit == "60/minute"
        assert settings.run_migrations_on_startup is False

    def test_settings_are_frozen(self):
        settings = Settings(database_url=PG_URL)

        with pytest.raises(ValidationError):
            settings.debug = True


@pytest.mark.unit
class TestIsSqlite:
    def test_sqlite_url(self):
        assert Settings(database_url="sqlite+aiosqlite://").is_sqlite is True

    def test_postgres_url(self):
        assert Settings(database_url=PG_URL).is_sqlite is False


# ---------------------------------------------------------------------------
# allowed_origins
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestAllowedOrigins:
    def test_debug_includes_localhost(self):
        settings = Settings(database_url=PG_URL, debug=True)

        assert "http://localhost:3000" in settings.allowed_origins
        assert "http://localhost:5173" in settings.allowed_origins

    def test_production_excludes_dev_ports(self):
        settings = Settings(
            database_url=PG_URL,
            debug=False,
            frontend_url="https://app.offerhub.io",
        )

        assert settings.allowed_origins == ["https://app.offerhub.io"]

    def test_extra_origins_are_split_and_deduplicated(self):
        settings = Settings(
            database_url=PG_URL,
            debug=True,
            frontend_url="http://localhost:3000",
            cors_allowed_origins=" https://a.example , http://localhost:5173,,",
        )

        assert settings.allowed_origins == [
            "http://localhost:3000",
            "http://localhost:5173",
            "https://a.example",
        ]


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestGetSettings:
    def test_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_clear_cache_builds_new_instance(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("WRITE_RATE_LIMIT", "5/minute")

        clear_settings_cache()
        second = get_settings()

        assert second is not first
        assert second.write_rate_limit == "5/minute"
