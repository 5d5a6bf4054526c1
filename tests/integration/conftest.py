"""
Integration Test Fixtures.

Fixtures for integration tests - a real application over a real
in-memory database, driven through httpx without a network.
"""

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from scribe.backend.core.database import Database
from scribe.backend.main import create_app
from scribe.backend.models import Note

BASE_URL = "http://test"


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the application.

    ASGITransport does not run the lifespan, so the database is injected
    already connected. Unhandled server errors come back as 500 responses.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url=BASE_URL,
    ) as test_client:
        yield test_client


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_ok(response: Any, expected_status: int = 200) -> Any:
        """
        Assert the response has the expected success status.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert the response is an error body.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert isinstance(data.get("error"), str), f"Missing error text: {data}"
        assert data.get("message") == data["error"]

        if expected_code:
            assert data.get("code") == expected_code, (
                f"Expected error code {expected_code}, got {data.get('code')}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert the response is a request validation error (400)."""
        data = ApiAssertions.assert_error(response, 400, "VAL_REQUEST_INVALID")

        if field:
            errors = data.get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()


@pytest.fixture
def create_note(client: AsyncClient):
    """
    Create a note through the API and return its JSON.

    Usage:
        note = await create_note(content="<p>Hi</p>", tags=["a"])
    """

    async def factory(content: str = "<p>Some content</p>", **fields: Any) -> dict[str, Any]:
        response = await client.post("/notes", json={"content": content, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return factory


@pytest.fixture
def seed_note(database: Database):
    """
    Insert a note straight into the application's database.

    Use this to control timestamps or store values the API would
    normalize (such as retired mood names).

    Usage:
        note = await seed_note(content="<p>Hi</p>", updated_at=datetime(2024, 1, 1))
    """

    async def factory(
        content: str = "<p>Some content</p>",
        title: str = "Some content",
        tags: list[str] | None = None,
        updated_at: datetime | None = None,
        **fields: Any,
    ) -> Note:
        async with database.session() as session:
            note = Note(title=title, content=content, tags=list(tags or []), **fields)
            if updated_at is not None:
                note.created_at = updated_at
                note.updated_at = updated_at
            session.add(note)
            await session.commit()
            return note

    return factory
