"""
Unit Tests for Database helpers.

Tests the casefold() SQL function rendering per dialect.
"""

import pytest
from sqlalchemy import column
from sqlalchemy.dialects import postgresql, sqlite

from scribe.backend.core.database import Database, _fold, casefold


class TestCasefold:
    def test_sqlite_uses_registered_function(self):
        sql = str(casefold(column("title")).compile(dialect=sqlite.dialect()))

        assert sql == "casefold(title)"

    def test_postgresql_uses_lower(self):
        sql = str(casefold(column("title")).compile(dialect=postgresql.dialect()))

        assert sql == "lower(title)"

    def test_fold_handles_accents_and_null(self):
        assert _fold("CAFÉ AÇÃO") == "café ação"
        assert _fold(None) is None


class TestDatabase:
    def test_engine_before_connect(self):
        database = Database("sqlite+aiosqlite:///:memory:")

        assert database.is_connected is False
        with pytest.raises(RuntimeError, match="not connected"):
            database.engine
