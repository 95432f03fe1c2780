"""
Unit Tests for Configuration

Tests for settings and configuration management.
"""

import pytest
from pydantic import ValidationError

from kinderportal.config import DEV_SESSION_SECRET, Settings


def test_settings_defaults():
    """Test default settings values."""
    settings = Settings()

    assert settings.ENVIRONMENT in ["local", "staging", "production"]
    assert settings.LOG_LEVEL in ["DEBUG", "INFO", "WARNING", "ERROR"]
    assert isinstance(settings.DATABASE_URL, str)
    assert settings.SESSION_COOKIE_NAME
    assert settings.SESSION_MAX_AGE_SECONDS > 0


def test_settings_environment_specific():
    """Test environment-specific behavior."""
    settings_local = Settings(ENVIRONMENT="local")
    assert settings_local.is_local is True
    assert settings_local.is_production is False

    settings_prod = Settings(ENVIRONMENT="production", SESSION_SECRET="a-real-secret")
    assert settings_prod.is_local is False
    assert settings_prod.is_production is True


@pytest.mark.parametrize("secret", ["", DEV_SESSION_SECRET])
def test_production_rejects_dev_session_secret(secret):
    """Production must not sign cookies with a guessable secret."""
    with pytest.raises(ValidationError, match="SESSION_SECRET"):
        Settings(ENVIRONMENT="production", SESSION_SECRET=secret)


def test_dev_session_secret_allowed_locally():
    settings = Settings(ENVIRONMENT="local", SESSION_SECRET=DEV_SESSION_SECRET)

    assert settings.SESSION_SECRET == DEV_SESSION_SECRET


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///env.db")
    monkeypatch.setenv("CORS_ORIGINS", '["https://portal.example.kz"]')
    monkeypatch.setenv("BCRYPT_ROUNDS", "5")

    settings = Settings()

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///env.db"
    assert settings.CORS_ORIGINS == ["https://portal.example.kz"]
    assert settings.BCRYPT_ROUNDS == 5


def test_bcrypt_rounds_bounds():
    with pytest.raises(ValidationError):
        Settings(BCRYPT_ROUNDS=3)
