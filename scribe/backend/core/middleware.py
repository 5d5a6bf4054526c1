"""
Request Context Middleware.

Tags every request with an ID and the calling front end, binds both to
the structlog context, and reports the handling time in response headers.
"""

import uuid
from datetime import datetime

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scribe.backend.core.logging import get_logger
from scribe.backend.core.utils import utc_now

logger = get_logger(__name__)

# Front ends that may identify themselves with X-Frontend-ID.
# Must be a subset of VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "cli", "api", "internal"}

# Requests that change notes are logged at info; reads stay at debug
MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def _frontend_of(request: Request) -> str:
    frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


def _elapsed_ms(start_time: datetime) -> int:
    return int((utc_now() - start_time).total_seconds() * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: propagated from the request, generated when absent
    - X-Frontend-ID: calling front end (web, cli, api, internal); others are "unknown"
    - X-Response-Time: handling time in milliseconds

    Access in endpoints:
        request.state.request_id
        request.state.frontend
        request.state.start_time
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        frontend = _frontend_of(request)
        start_time = utc_now()

        request.state.request_id = request_id
        request.state.frontend = frontend
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "origin": request.headers.get("Origin"),
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            # The exception handlers build the response
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": _elapsed_ms(start_time),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        else:
            duration_ms = _elapsed_ms(start_time)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            log = logger.info if request.method in MUTATING_METHODS else logger.debug
            log(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
