"""Alembic environment for the Quill schema (users, types, drafts, posts)."""

from __future__ import annotations

import asyncio
import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]

SRC_DIR = str(Path(__file__).resolve().parents[1] / "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from quill.config import get_async_database_url  # type: ignore  # noqa: E402
from quill.database.connection import get_database_url  # type: ignore  # noqa: E402
from quill.dbmodels import target_metadata  # type: ignore  # noqa: E402

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)

# Honours QUILL_DATABASE_URL the same way the running service does
DATABASE_URL = get_database_url()


def configure(**options) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite rebuilds tables to alter constraints
        render_as_batch=DATABASE_URL.startswith("sqlite"),
        **options,
    )


def run_offline() -> None:
    """Emit SQL for DATABASE_URL's dialect without connecting."""
    configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_with_connection(connection: Connection) -> None:
    configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = create_async_engine(get_async_database_url(DATABASE_URL), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(run_with_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
