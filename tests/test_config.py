"""
Tests for settings and logging configuration.
"""

import logging

import pytest

from shopquery.config import Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///shopquery.db"
        assert settings.seed_random_seed == 2021
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        monkeypatch.setenv("SEED_ORDERS", "7")

        settings = get_settings()

        assert settings.database_url == "sqlite:///other.db"
        assert settings.seed_orders == 7

    def test_settings_are_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_negative_counts_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEED_CUSTOMERS", "-1")

        with pytest.raises(ValueError):
            Settings(_env_file=None)


class TestLogging:
    def test_configure_logging_uses_setting(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging()

        assert calls[0]["level"] == "DEBUG"

    def test_explicit_level_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging("warning")

        assert calls[0]["level"] == "WARNING"
