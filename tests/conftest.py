"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database. Every test gets a fresh
    engine with all tables created, so no test can see another's data.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from scribe.backend.core.database import Database, install_casefold
from scribe.backend.models import Base, Note

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# In-memory SQLite lives inside one connection; StaticPool shares it
SQLITE_ENGINE_OPTIONS: dict[str, Any] = {
    "poolclass": StaticPool,
    "connect_args": {"check_same_thread": False},
}


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **SQLITE_ENGINE_OPTIONS)
    install_casefold(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Usage:
        async def test_create_note(db_session: AsyncSession):
            note = Note(content="<p>Hi</p>", title="Hi")
            db_session.add(note)
            await db_session.flush()
            assert note.id is not None
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


NoteFactory = Callable[..., Awaitable[Note]]


@pytest.fixture
def make_note(db_session: AsyncSession) -> NoteFactory:
    """
    Insert a note directly, bypassing the service rules.

    Usage:
        note = await make_note(content="<p>Hi</p>", tags=["a"], updated_at=...)
    """

    async def factory(
        content: str = "<p>Some content</p>",
        title: str = "Some content",
        tags: list[str] | None = None,
        updated_at: datetime | None = None,
        **fields: Any,
    ) -> Note:
        note = Note(title=title, content=content, tags=list(tags or []), **fields)
        if updated_at is not None:
            note.created_at = updated_at
            note.updated_at = updated_at
        db_session.add(note)
        await db_session.flush()
        await db_session.refresh(note)
        return note

    return factory


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Connected Database with all tables, disposed after the test."""
    database = Database(TEST_DATABASE_URL, **SQLITE_ENGINE_OPTIONS)
    await database.connect(create_tables=True)
    yield database
    await database.dispose()
