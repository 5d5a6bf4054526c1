"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Tests run against the real project files (YAML configs).
Failure scenarios use tmp_path to create controlled filesystems.
"""

import pytest

from scribe.backend.core.config import (
    AppConfig,
    find_project_root,
    get_api_base_url,
    get_app_config,
    get_database_url,
    get_server_port,
    get_settings,
    load_yaml_config,
    validate_project_root,
)
from scribe.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
)

ENV_OVERRIDES = ("DATABASE_URL", "PORT", "SCRIBE_API_URL")


@pytest.fixture(autouse=True)
def _clean_config(monkeypatch):
    """Fresh config load per test, without overrides leaking in from the shell."""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert (root / ".project_root").exists()
        assert (root / "config" / "settings").is_dir()

    def test_missing_marker_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError):
            find_project_root()

    def test_validate_exits_with_message(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            validate_project_root()


class TestLoadYamlConfig:
    def test_loads_application_yaml(self):
        data = load_yaml_config("application.yaml")
        assert data["name"] == "Scribe Notes"

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_yaml_config("nope.yaml")

    def test_unknown_key_is_rejected(self, tmp_path, monkeypatch):
        root = find_project_root()
        settings_dir = tmp_path / "config" / "settings"
        settings_dir.mkdir(parents=True)
        (tmp_path / ".project_root").touch()
        for name in ("application.yaml", "logging.yaml"):
            (settings_dir / name).write_text((root / "config" / "settings" / name).read_text())
        (settings_dir / "database.yaml").write_text(
            "url: sqlite+aiosqlite:///:memory:\necho: false\ncreate_tables: true\npool: 5\n"
        )
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="database.yaml"):
            AppConfig()


class TestAppConfig:
    """Tests for typed YAML access."""

    def test_sections_are_typed(self):
        config = get_app_config()
        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.database, DatabaseSchema)
        assert isinstance(config.logging, LoggingSchema)

    def test_default_port(self):
        assert get_app_config().application.server.port == 4000

    def test_cors_allow_list(self):
        origins = get_app_config().application.cors.origins
        assert "http://localhost:5173" in origins
        assert "*" not in origins

    def test_cached(self):
        assert get_app_config() is get_app_config()


class TestEnvironmentOverrides:
    """Environment values win over YAML values."""

    def test_database_url_from_yaml(self):
        assert get_database_url() == get_app_config().database.url

    def test_database_url_from_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
        assert get_database_url() == "sqlite+aiosqlite:///./other.db"

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "4100")
        assert get_server_port() == 4100

    def test_port_from_yaml(self):
        assert get_server_port() == 4000

    def test_api_url_from_env(self, monkeypatch):
        monkeypatch.setenv("SCRIBE_API_URL", "http://notes.internal:9000")
        base_url, timeout = get_api_base_url()
        assert base_url == "http://notes.internal:9000"
        assert timeout == 30.0

    def test_api_url_from_yaml(self):
        base_url, _ = get_api_base_url()
        assert base_url == "http://localhost:4000"
