"""
Async database engine and session management.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from travloger.config import get_settings
from travloger.models.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    async with async_session_maker() as session:
        yield session


async def create_tables(bind=None) -> list[str]:
    """
    Create every table that does not exist yet.
    Safe to call repeatedly; returns the names of the known tables.
    """
    # Import models so every table is registered on Base.metadata
    import travloger.models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    names = sorted(Base.metadata.tables.keys())
    logger.info("Database tables ensured: %d tables", len(names))
    return names
