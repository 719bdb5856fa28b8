"""Tests for settings loaded from the environment."""

from decimal import Decimal

import pytest

from kz_tax_engine.config import Settings


class TestSettings:
    """Test Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for key in ("DATABASE_URL", "PORT", "DEBUG", "LOG_LEVEL", "DEFAULT_TAX_RATE", "DEFAULT_TAX_YEAR"):
            monkeypatch.delenv(key, raising=False)
        settings = Settings.from_env()

        assert settings.database_url == "sqlite+aiosqlite:///./kz_tax.db"
        assert settings.PORT == 8000
        assert settings.DEBUG is False
        assert settings.log_level == "INFO"
        assert settings.default_tax_rate == Decimal("4")
        assert settings.default_tax_year == 2026

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DEBUG", "True")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("DEFAULT_TAX_RATE", "3")
        settings = Settings.from_env()

        assert settings.database_url == "sqlite+aiosqlite:///:memory:"
        assert settings.PORT == 9000
        assert settings.DEBUG is True
        assert settings.log_level == "DEBUG"
        assert settings.default_tax_rate == Decimal("3")

    def test_bad_tax_rate_names_the_key(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TAX_RATE", "four")
        with pytest.raises(ValueError, match="DEFAULT_TAX_RATE"):
            Settings.from_env()
