"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases
or a running server.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def raw_note() -> dict[str, Any]:
    """A note as the API returns it."""
    return {
        "id": "6f1c2a4e-8d0b-4c59-9a57-0c1f2e3d4b5a",
        "title": "Groceries",
        "content": "<p>Milk, eggs</p>",
        "tags": ["home"],
        "attachments": [],
        "archived": False,
        "pinned": False,
        "mood": "neutro",
        "progress": 0,
        "createdAt": "2024-05-01T10:00:00",
        "updatedAt": "2024-05-01T10:00:00",
    }
