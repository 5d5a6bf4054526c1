"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from scribe.backend.core import logging as logging_module
from scribe.backend.core.config_schema import LoggingSchema
from scribe.backend.core.logging import (
    VALID_SOURCES,
    _resolve_log_path,
    get_logger,
    log_with_source,
    setup_logging,
)


@pytest.fixture
def logging_config() -> LoggingSchema:
    return LoggingSchema(
        level="INFO",
        format="json",
        handlers={
            "console": {"enabled": True},
            "file": {
                "enabled": False,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    )


@pytest.fixture
def patched_config(logging_config):
    with patch.object(
        logging_module,
        "get_app_config",
        return_value=SimpleNamespace(logging=logging_config),
    ):
        yield logging_config


def test_valid_sources():
    assert {"web", "cli", "client"} <= VALID_SOURCES
    assert isinstance(VALID_SOURCES, frozenset)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_uses_config_defaults(self, patched_config):
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_override_takes_precedence(self, patched_config):
        setup_logging(level="DEBUG", format_type="console")

        assert logging.getLogger().level == logging.DEBUG

    def test_console_handler_only(self, patched_config):
        setup_logging(enable_file_logging=False)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["StreamHandler"]

    def test_file_logging_creates_directory(self, patched_config, tmp_path):
        log_file = tmp_path / "logs" / "system.jsonl"

        with patch.object(logging_module, "_resolve_log_path", return_value=log_file):
            setup_logging(enable_console=False, enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]
        assert log_file.parent.is_dir()

        for handler in logging.getLogger().handlers:
            handler.close()


class TestLogWithSource:
    """Tests for log_with_source helper function."""

    def test_adds_source_field(self):
        logger = MagicMock()

        log_with_source(logger, "client", "info", "Notes loaded", count=3)

        logger.info.assert_called_once_with("Notes loaded", source="client", count=3)

    def test_raises_on_invalid_level(self):
        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "web", "nonexistent_level", "Test")


def test_resolve_log_path_relative_to_project_root(tmp_path):
    with patch.object(logging_module, "find_project_root", return_value=tmp_path):
        assert _resolve_log_path("logs/system.jsonl") == tmp_path / "logs" / "system.jsonl"
