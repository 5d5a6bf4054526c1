"""
Database Configuration.

SQLAlchemy async engine and session management.

The engine is owned by an explicitly constructed Database object with a
connect/dispose lifecycle. The application creates one in its lifespan
and stores it on app.state; request handlers receive sessions through
the get_db_session dependency.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy import String, event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from scribe.backend.core.logging import get_logger
from scribe.backend.models.base import Base

logger = get_logger(__name__)


class casefold(FunctionElement):
    """
    Unicode case folding of a string expression, for case-insensitive matching.

    Compiles to lower() on backends whose lower() folds all of Unicode.
    SQLite's lower() only folds ASCII, so there it calls the casefold()
    function that install_casefold() registers on each connection.
    """

    type = String()
    name = "casefold"
    inherit_cache = True


@compiles(casefold)
def _compile_casefold(element: casefold, compiler: Any, **kw: Any) -> str:
    return f"lower({compiler.process(element.clauses, **kw)})"


@compiles(casefold, "sqlite")
def _compile_casefold_sqlite(element: casefold, compiler: Any, **kw: Any) -> str:
    return f"casefold({compiler.process(element.clauses, **kw)})"


def _fold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def install_casefold(engine: AsyncEngine) -> None:
    """Register casefold() on every new SQLite connection of the engine."""

    @event.listens_for(engine.sync_engine, "connect")
    def _register(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.create_function("casefold", 1, _fold)


class Database:
    """
    Owner of the async engine and session factory.

    Usage:
        database = Database("sqlite+aiosqlite:///./data/scribe.db")
        await database.connect(create_tables=True)
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False, **engine_options: Any) -> None:
        self.url = url
        self.echo = echo
        self.engine_options = engine_options
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get the engine. Raises RuntimeError before connect()."""
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self, create_tables: bool = False) -> None:
        """
        Create the engine and session factory.

        Args:
            create_tables: Create missing tables from model metadata.
        """
        if self._engine is not None:
            return

        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_async_engine(self.url, echo=self.echo, **self.engine_options)
        if url.get_backend_name() == "sqlite":
            install_casefold(self._engine)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        if create_tables:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "Database connected",
            extra={"backend": url.get_backend_name(), "database": url.database},
        )

    async def dispose(self) -> None:
        """Dispose the engine and release pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database disconnected")

    def session(self) -> AsyncSession:
        """Open a new session. Use as an async context manager."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the handler returns, rolls back when it raises.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
