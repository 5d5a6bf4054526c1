"""
Notes API Client.

Typed async HTTP client for the notes API. One request per logical
operation; JSON in, JSON out. Every request carries X-Frontend-ID so the
server can attribute its logs.
"""

from collections.abc import Sequence
from typing import Any

import httpx

from scribe.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

RawNote = dict[str, Any]


class RequestFailed(Exception):
    """
    Raised for any non-2xx response or transport failure.

    Attributes:
        status_code: HTTP status, or None when no response was received
        message: Human-readable message (server's error text when provided)
    """

    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code} {message}" if status_code else message)


def _get_client_config() -> tuple[str, float]:
    """Load base URL and timeout from configuration."""
    from scribe.backend.core.config import get_api_base_url

    return get_api_base_url()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return response.reason_phrase or f"HTTP {response.status_code}"


def list_params(
    q: str | None = None,
    tags: Sequence[str] | None = None,
    archived: bool | None = None,
    mood: str | None = None,
) -> dict[str, str]:
    """
    Query parameters for the list endpoint.

    Only filters that are present are sent; nothing is sent as an empty string.
    """
    params: dict[str, str] = {}
    if q:
        params["q"] = q
    if tags:
        params["tags"] = ",".join(tags)
    if archived is not None:
        params["archived"] = "true" if archived else "false"
    if mood:
        params["mood"] = mood
    return params


class NotesClient:
    """
    HTTP client for the notes API.

    Usage:
        client = NotesClient()
        notes = await client.list_notes(tags=["work"], archived=False)
        note = await client.create_note({"content": "<p>Hello</p>"})
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        frontend: str = "cli",
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL. If None, read from configuration.
            timeout: Request timeout in seconds. If None, read from configuration.
            transport: Optional httpx transport (tests, ASGI apps).
            frontend: Value of the X-Frontend-ID header.
        """
        if base_url is None or timeout is None:
            config_base_url, config_timeout = _get_client_config()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.frontend = frontend
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Send a request and decode the JSON body.

        Returns:
            Decoded JSON payload, or None for an empty body (204)

        Raises:
            RequestFailed: On a non-2xx status or transport failure
        """
        client = await self._get_client()

        log_with_source(logger, "client", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "client",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise RequestFailed(None, f"Could not reach {self.base_url}: {e}") from e

        log_with_source(
            logger,
            "client",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if not response.is_success:
            message = _error_message(response)
            log_with_source(
                logger,
                "client",
                "warning",
                "API error response",
                method=method,
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise RequestFailed(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RequestFailed(response.status_code, "Response body is not valid JSON") from e

    async def health(self) -> dict[str, Any]:
        return await self.request("GET", "/health")

    async def list_notes(
        self,
        q: str | None = None,
        tags: Sequence[str] | None = None,
        archived: bool | None = None,
        mood: str | None = None,
    ) -> list[RawNote]:
        """List notes; only the filters given are sent."""
        params = list_params(q=q, tags=tags, archived=archived, mood=mood)
        return await self.request("GET", "/notes", params=params)

    async def get_note(self, note_id: str) -> RawNote:
        return await self.request("GET", f"/notes/{note_id}")

    async def create_note(self, data: dict[str, Any]) -> RawNote:
        return await self.request("POST", "/notes", json=data)

    async def update_note(self, note_id: str, patch: dict[str, Any]) -> RawNote:
        return await self.request("PUT", f"/notes/{note_id}", json=patch)

    async def delete_note(self, note_id: str) -> None:
        await self.request("DELETE", f"/notes/{note_id}")

    async def toggle_pin(self, note_id: str) -> RawNote:
        return await self.request("PATCH", f"/notes/{note_id}/pin")

    async def toggle_archive(self, note_id: str) -> RawNote:
        return await self.request("PATCH", f"/notes/{note_id}/archive")

    async def set_progress(self, note_id: str, progress: int) -> RawNote:
        return await self.request("PATCH", f"/notes/{note_id}/progress", json={"progress": progress})

    async def list_tags(self) -> list[str]:
        return await self.request("GET", "/tags")
