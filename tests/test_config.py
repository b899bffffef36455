"""Test environment-driven settings."""
import pytest

from core.config import DatabaseSettings, Settings


def test_defaults():
    settings = Settings.default()
    assert settings.environment == "development"
    assert not settings.is_production
    assert settings.database.url.startswith("postgresql+asyncpg://")
    assert settings.logging.file is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./books.db")
    monkeypatch.setenv("DB_ECHO", "TRUE")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "logs/api.log")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    settings = Settings.from_env()

    assert settings.database.is_sqlite
    assert settings.database.echo
    assert settings.logging.level == "DEBUG"
    assert settings.logging.file == "logs/api.log"
    assert settings.is_production
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_settings_are_frozen():
    with pytest.raises(AttributeError):
        Settings.default().environment = "production"


def test_postgres_is_not_sqlite():
    assert not DatabaseSettings().is_sqlite
