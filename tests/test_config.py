"""Unit tests for core/config.py -- DEBUG-conditional defaults and production checks."""

from __future__ import annotations

import pytest

from core.config import Settings

STRONG_KEY = "k" * 40


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("DEBUG", "SECRET_KEY", "DATABASE_URL", "DEFAULT_USER_PASSWORD", "BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)


def test_debug_fills_defaults() -> None:
    settings = Settings(debug=True, _env_file=None)
    assert len(settings.secret_key) >= 32
    assert settings.database_url == "sqlite:///autogiro.db"
    assert settings.default_user_password == "123456"
    assert settings.port == 3001
    assert settings.token_expire_seconds == 86400
    assert settings.bcrypt_rounds == 10


def test_production_requires_secret_key() -> None:
    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings(debug=False, database_url="sqlite:///x.db", _env_file=None)


def test_production_requires_database_url() -> None:
    with pytest.raises(ValueError, match="DATABASE_URL"):
        Settings(debug=False, secret_key=STRONG_KEY, _env_file=None)


def test_production_has_no_default_password() -> None:
    settings = Settings(debug=False, secret_key=STRONG_KEY, database_url="sqlite:///x.db", _env_file=None)
    assert settings.default_user_password == ""


def test_short_secret_key_rejected() -> None:
    with pytest.raises(ValueError, match="32"):
        Settings(debug=True, secret_key="short", _env_file=None)


def test_bcrypt_rounds_bounds() -> None:
    with pytest.raises(ValueError, match="BCRYPT_ROUNDS"):
        Settings(debug=True, bcrypt_rounds=3, _env_file=None)


def test_env_vars_are_read(monkeypatch) -> None:
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("SECRET_KEY", STRONG_KEY)
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/autogiro")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.debug is False
    assert settings.database_url.startswith("postgresql://")
    assert settings.port == 8080
