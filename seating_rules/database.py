"""
Seat inventory database: engine lifecycle and per-request sessions.

Validation only reads the seats table, so request sessions are never
committed; leaving the ``async with`` block rolls back and closes them.
"""

import logging
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import Settings, get_settings
from .models import Base

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_sessions: Optional[async_sessionmaker[AsyncSession]] = None


async def init_database(settings: Optional[Settings] = None) -> None:
    """Open the connection pool and make sure the seats table exists."""
    global _engine, _sessions
    settings = settings or get_settings()

    _engine = create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
        connect_args={"server_settings": {"application_name": "seating_rules"}},
    )
    _sessions = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Seat inventory database ready at {_engine.url.render_as_string(hide_password=True)}")


async def close_database() -> None:
    """Dispose of the connection pool."""
    global _engine, _sessions

    if _engine is not None:
        await _engine.dispose()
        logger.info("Seat inventory database closed")
    _engine = None
    _sessions = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a read-only session for one request."""
    if _sessions is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with _sessions() as session:
        yield session


async def ping_database() -> None:
    """Run ``SELECT 1``; raises when the database cannot be reached."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with _engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
