#!/usr/bin/env python3
"""Create database tables from SQLAlchemy models.

Handy for local SQLite databases and throwaway Postgres instances.
Note: create_all() only creates missing tables - it won't modify existing ones.
Use Alembic (alembic upgrade head) for anything long-lived.

Usage:
    cd api
    python -m scripts.create_tables
"""

import asyncio
import sys

# Add parent directory to path so we can import from core
sys.path.insert(0, str(__file__).rsplit("/scripts", 1)[0])

from core.database import Base, create_engine, dispose_engine
from core.logger import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables defined in models."""
    # Import models to ensure they're registered with Base.metadata
    import models  # noqa: F401

    engine = create_engine()
    logger.info("tables.create.started", tables=len(Base.metadata.tables))

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await dispose_engine(engine)

    logger.info("tables.create.completed")


if __name__ == "__main__":
    asyncio.run(create_tables())
