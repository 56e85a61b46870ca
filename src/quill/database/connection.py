"""
One async engine and session factory shared by the whole process

Resolvers, loaders and the CLI open short unit-of-work sessions through
``get_async_session``; tests point the engine at in-memory SQLite with
``init_database(url, force_reinit=True)``.
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy import make_url, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import get_async_database_url, settings
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Database:
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]


_database: _Database | None = None
_lock = threading.Lock()


def get_database_url() -> str:
    """QUILL_DATABASE_URL as set right now, else the configured default."""
    return os.getenv("QUILL_DATABASE_URL") or settings.database_url


def reset_database() -> None:
    """Forget the current engine so the next use builds a new one. Does not dispose it."""
    global _database
    _database = None


def _engine_options(async_url: str) -> dict:
    options: dict = {"echo": settings.sql_echo}
    if not async_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
        return options

    options["connect_args"] = {"check_same_thread": False}
    # Each connection to :memory: is a separate empty database
    if make_url(async_url).database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Build the shared engine unless one exists and no other URL was asked for."""
    global _database

    if _database is not None and not force_reinit and database_url is None:
        return

    with _lock:
        if _database is not None and not force_reinit and database_url is None:
            return

        url = database_url or get_database_url()
        async_url = get_async_database_url(url)
        engine = create_async_engine(async_url, **_engine_options(async_url))
        _database = _Database(
            engine=engine,
            sessions=async_sessionmaker(engine, autoflush=False, expire_on_commit=False),
        )

    logger.info("Database initialized", database_url=make_url(url).render_as_string())


def _current() -> _Database:
    if _database is None:
        init_database()
    if _database is None:
        raise RuntimeError("Database not initialized")
    return _database


def get_async_engine() -> AsyncEngine:
    return _current().engine


async def test_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1`` against the shared engine; returns (ok, error message)."""
    if _database is None:
        return False, "Database engine not initialized"

    try:
        async with _database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        return False, f"{type(e).__name__}: {e}"
    return True, None


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Unit-of-work session: commits on clean exit, rolls back when the block raises.

    ``expire_on_commit`` is off, so rows read here stay usable after the
    block; ``PostService`` relies on that to return loaded posts.
    """
    async with _current().sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
