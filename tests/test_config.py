"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from calendar_digest.config import (
    ConfigurationError,
    Settings,
    get_settings,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, monkeypatch):
        for name in ("NOTIFICATION_HOUR", "WEEKLY_NOTIFICATION_DAY", "LOCALE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.notification_hour == 8
        assert settings.weekly_notification_day == 1
        assert settings.locale == "ja"
        assert settings.google_credentials_type == "service_account"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://example.test/hook")
        monkeypatch.setenv("CALENDAR_ID", "team@group.calendar.google.com")
        monkeypatch.setenv("NOTIFICATION_HOUR", "7")
        monkeypatch.setenv("WEEKLY_NOTIFICATION_DAY", "0")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.discord_webhook_url == "https://example.test/hook"
        assert settings.calendar_id == "team@group.calendar.google.com"
        assert settings.notification_hour == 7
        assert settings.weekly_notification_day == 0
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_invalid_hour(self, hour: int):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, notification_hour=hour)

    @pytest.mark.parametrize("day", [-1, 7])
    def test_invalid_weekday(self, day: int):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, weekly_notification_day=day)

    def test_invalid_locale(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, locale="fr")


class TestRequiredAtUse:
    """Tests for settings that are only checked when used."""

    def test_missing_values_load(self, monkeypatch):
        """Test that settings load without webhook or calendar."""
        monkeypatch.delenv("DISCORD_WEBHOOK_URL", raising=False)
        monkeypatch.delenv("CALENDAR_ID", raising=False)

        settings = Settings(_env_file=None)

        assert settings.discord_webhook_url is None
        assert settings.calendar_id is None

    def test_blank_values_are_unset(self):
        settings = Settings(_env_file=None, discord_webhook_url="  ", calendar_id="")
        assert settings.discord_webhook_url is None
        assert settings.calendar_id is None

    def test_configuration_error_names_setting(self):
        error = ConfigurationError("discord_webhook_url")
        assert error.setting == "discord_webhook_url"
        assert "DISCORD_WEBHOOK_URL" in str(error)


class TestGetSettings:
    """Tests for settings caching."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear(self):
        first = get_settings()
        get_settings.cache_clear()
        assert get_settings() is not first
