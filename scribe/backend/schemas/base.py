"""
Base Schemas.

Shared response schemas.
"""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Error body returned for every failed request.

    `error` and `message` carry the same human-readable text so callers
    reading either key get the message.
    """

    error: str
    message: str
    code: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class HealthResponse(BaseModel):
    """Liveness probe body."""

    ok: bool = True
