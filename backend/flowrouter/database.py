"""
FlowRouter Backend - Database Engine and Sessions
=================================================

What:  Async SQLAlchemy engine, session factory, declarative base and
       lifecycle helpers.
How:   The engine is created at import time from settings. Repositories
       open one session per operation from `async_session_factory`.

Connection Pooling:
    PostgreSQL (asyncpg) uses a queue pool sized from settings with
    pre-ping and hourly recycling. SQLite (aiosqlite) keeps SQLAlchemy's
    defaults since pool sizing does not apply to a file database.
"""

import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from flowrouter.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: entities returned by repositories stay readable
# after their transaction has been committed and the session closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema() -> None:
    """Create any missing tables for the registered models."""
    # Models must be imported so they register with Base.metadata
    from flowrouter.models.book import Book  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))


async def dispose_engine() -> None:
    """Close all pooled connections (application shutdown)."""
    await engine.dispose()
