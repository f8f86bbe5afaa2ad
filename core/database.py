"""
Postgres access for events, RSVPs and collections.

Queries in core/queries take an AsyncConnection from get_connection()
(reads) or get_transaction() (writes that must commit together, such as
creating a user and their RSVP). Alembic uses get_sync_database_url().
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from .errors import ConfigurationError
from .tables import metadata  # noqa: F401 - exported for Alembic

_engine: AsyncEngine | None = None

_SCHEMES = ("postgresql://", "postgresql+asyncpg://", "postgresql+psycopg2://")


def _database_url(scheme: str) -> str:
    """DATABASE_URL rewritten to use ``scheme`` (asyncpg for the app, psycopg2 for Alembic)."""
    database_url = os.environ.get("DATABASE_URL", "")
    for known in _SCHEMES:
        if database_url.startswith(known):
            return scheme + database_url[len(known):]

    if not database_url:
        raise ConfigurationError("DATABASE_URL environment variable must be set")
    raise ConfigurationError("DATABASE_URL must be a postgresql:// URL")


def get_engine() -> AsyncEngine:
    """Get or create the async engine. Pool size is tunable via DB_POOL_SIZE."""
    global _engine
    if _engine is None:
        _engine = create_async_engine(
            _database_url("postgresql+asyncpg://"),
            echo=os.environ.get("SQL_ECHO", "").lower() == "true",
            pool_size=int(os.environ.get("DB_POOL_SIZE", "5")),
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
        )
    return _engine


@asynccontextmanager
async def get_connection() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get a pooled connection without an explicit transaction.

    Usage:
        async with get_connection() as conn:
            events = await get_full_events(conn, [1, 2])
    """
    async with get_engine().connect() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get a connection inside a transaction; commits on exit, rolls back on error.

    Usage:
        async with get_transaction() as conn:
            user = await get_or_create_user_by_email(conn, email)
            await create_rsvp(conn, event_id, user["user_id"])
    """
    async with get_engine().begin() as conn:
        yield conn


async def close_engine() -> None:
    """Dispose of the pool. Called from the app lifespan on shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def is_configured() -> bool:
    return bool(os.environ.get("DATABASE_URL"))


def get_sync_database_url() -> str:
    """psycopg2 URL for Alembic, which runs migrations synchronously."""
    return _database_url("postgresql://")
