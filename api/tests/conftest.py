"""Pytest configuration and shared fixtures.

This module provides:
- A fresh in-memory SQLite database per test (aiosqlite, FKs enforced)
- Async session fixtures for repository tests
- FastAPI test client for route tests, wired to the same database
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.config import clear_settings_cache
from core.database import Base, enable_sqlite_foreign_keys
from core.wide_event import init_wide_event

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def setup_wide_event():
    """Initialize wide_event context for all tests.

    Repositories use set_wide_event_fields() which requires context initialization.
    In production this is done by middleware; in tests we do it here.
    """
    init_wide_event()
    yield


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory database with the full schema, discarded after each test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(
    test_engine: AsyncEngine,
) -> AsyncGenerator[AsyncSession]:
    """Session for repository tests. Nothing is committed."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def app(test_engine: AsyncEngine) -> AsyncGenerator[FastAPI]:
    """FastAPI app pointed at the per-test database.

    ASGITransport does not run the lifespan, so the state it would set up is
    stored here directly.
    """
    # Import here so env vars above are applied before Settings is built
    from main import app as fastapi_app

    fastapi_app.state.engine = test_engine
    fastapi_app.state.session_maker = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    fastapi_app.state.init_done = True
    fastapi_app.state.init_error = None

    yield fastapi_app


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio backend for anyio (required by httpx)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
