"""Tests for application settings."""

import pytest

from pydantic import ValidationError

from src.infrastructure.config.settings import (
    Settings,
    find_env_file,
    get_settings,
    reload_settings,
)
from src.infrastructure.exceptions import ConfigurationError


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.delenv("PHONE_REGION", raising=False)

        settings = Settings(_env_file=None)

        assert settings.LOG_FORMAT == "console"
        assert settings.PHONE_REGION == "fr-FR"

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/test")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "postgresql://u:p@db:5432/test"
        assert settings.LOG_LEVEL == "DEBUG"

    def test_invalid_log_format(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_async_database_url(self) -> None:
        settings = Settings(
            _env_file=None, DATABASE_URL="postgresql://u:p@localhost:5432/db"
        )

        assert settings.get_async_database_url() == (
            "postgresql+asyncpg://u:p@localhost:5432/db"
        )

    def test_async_database_url_keeps_explicit_driver(self) -> None:
        url = "sqlite+aiosqlite:///tmp/test.db"
        settings = Settings(_env_file=None, DATABASE_URL=url)

        assert settings.get_async_database_url() == url

    def test_empty_database_url(self) -> None:
        settings = Settings(_env_file=None, DATABASE_URL="")

        with pytest.raises(ConfigurationError):
            settings.get_database_url()


class TestGetSettings:
    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reload(self, monkeypatch) -> None:
        first = get_settings()
        monkeypatch.setenv("PHONE_REGION", "fr-FR")

        reloaded = reload_settings()

        assert reloaded is not first
        assert reloaded is get_settings()


class TestFindEnvFile:
    def test_finds_env_in_parent(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=DEBUG\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_env_file(nested) == env_file.resolve()

    def test_none_when_missing(self, tmp_path) -> None:
        nested = tmp_path / "empty"
        nested.mkdir()

        result = find_env_file(nested)

        assert result is None or not str(result).startswith(str(tmp_path))
