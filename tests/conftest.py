"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from quill.dbmodels import Base, Drafts, Posts, Types, Users

TEST_DATABASE_URL = "sqlite:///:memory:"

# Fixed base time so ordering assertions never depend on the clock
BASE_TIME = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest_asyncio.fixture(scope="function")
async def test_database() -> AsyncGenerator[AsyncEngine, None]:
    """Point the shared engine at a fresh in-memory SQLite database."""
    from quill.database.connection import get_async_engine, init_database, reset_database

    reset_database()
    init_database(TEST_DATABASE_URL, force_reinit=True)
    engine = get_async_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
    reset_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_database: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session bound to the test database."""
    from quill.database.connection import get_async_session

    async with get_async_session() as session:
        yield session


@dataclass
class SeedData:
    alice: Users
    bob: Users
    article: Types
    note: Types
    draft: Drafts


@pytest_asyncio.fixture(scope="function")
async def seed(db_session: AsyncSession) -> SeedData:
    """Two writers, two types and one draft written by alice."""
    alice = Users(username="alice", email="alice@example.com", display_name="Alice")
    bob = Users(username="bob", email="bob@example.com", display_name="Bob")
    article = Types(name="article", description="Long-form writing")
    note = Types(name="note", description="Short update")
    db_session.add_all([alice, bob, article, note])
    await db_session.flush()

    draft = Drafts(
        title="Hello world",
        slug="hello-draft",
        body="First words",
        type_id=article.id,
        writer_id=alice.id,
    )
    db_session.add(draft)
    await db_session.commit()

    return SeedData(alice=alice, bob=bob, article=article, note=note, draft=draft)


@pytest.fixture
def make_post(db_session: AsyncSession):
    """Insert posts directly, with created_at offset from BASE_TIME by ``minutes``."""

    async def _make_post(
        *,
        writer: Users,
        type_: Types,
        slug: str,
        title: str = "A post",
        body: str | None = None,
        minutes: int = 0,
    ) -> Posts:
        created_at = BASE_TIME + timedelta(minutes=minutes)
        post = Posts(
            title=title,
            slug=slug,
            body=body,
            type_id=type_.id,
            writer_id=writer.id,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(post)
        await db_session.commit()
        return post

    return _make_post


@pytest.fixture
def make_draft(db_session: AsyncSession):
    async def _make_draft(
        *, writer: Users, type_: Types, title: str = "Draft", slug: str = "draft"
    ) -> Drafts:
        draft = Drafts(title=title, slug=slug, body=None, type_id=type_.id, writer_id=writer.id)
        db_session.add(draft)
        await db_session.commit()
        return draft

    return _make_draft


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "slow: mark test as slow running")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
