"""
FastAPI Application Entry Point.

This is the main entry point for the notes API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scribe.backend.api import health
from scribe.backend.api import router as api_router
from scribe.backend.core.config import get_app_config, get_database_url
from scribe.backend.core.database import Database
from scribe.backend.core.exception_handlers import register_exception_handlers
from scribe.backend.core.logging import get_logger, setup_logging
from scribe.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Connects the Database held on app.state (building one from
    configuration when none was injected) and disposes it on shutdown.
    """
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    database: Database | None = app.state.database
    if database is None:
        database = Database(get_database_url(), echo=app_config.database.echo)
        app.state.database = database
    await database.connect(create_tables=app_config.database.create_tables)

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    yield
    await database.dispose()
    logger.info("Application shutting down")


def create_app(database: Database | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Storage handle to serve from. Built from configuration
            at startup when omitted.
    """
    app_settings = get_app_config().application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(RequestContextMiddleware)

    # Requests without an Origin header (curl, health probes) are not affected
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors.origins,
        allow_credentials=False,
        allow_methods=app_settings.cors.methods,
        allow_headers=app_settings.cors.headers,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn scribe.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
