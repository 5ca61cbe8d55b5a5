"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Secrets (webhook URL, credential files) should be provided via environment
variables or a local `.env` file, never committed config.

## Environment Variables

- DISCORD_WEBHOOK_URL: Webhook endpoint that receives the digest
- CALENDAR_ID: Google Calendar ID to read events from
- NOTIFICATION_HOUR: Hour of day (0-23) the digest is sent (default: 8)
- WEEKLY_NOTIFICATION_DAY: Weekday (0=Sunday..6=Saturday) that gets the
  weekly digest instead of the daily one (default: 1, Monday)
- LOCALE: Message language, "ja" or "en" (default: ja)
- GOOGLE_CREDENTIALS_FILE: Path to a service account key or authorized user token
- GOOGLE_CREDENTIALS_TYPE: "service_account" or "authorized_user"
- LOG_LEVEL: Logging level (default: INFO)

The webhook URL and calendar ID are optional at load time. They are checked
when first used, so a missing value fails the calendar lookup or the webhook
call rather than process startup.

## Example .env file

```
DISCORD_WEBHOOK_URL=https://discord.com/api/webhooks/123/abc
CALENDAR_ID=team@group.calendar.google.com
GOOGLE_CREDENTIALS_FILE=service-account.json
NOTIFICATION_HOUR=8
WEEKLY_NOTIFICATION_DAY=1
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when a required setting is missing at the point of use."""

    def __init__(self, setting: str):
        super().__init__(f"Missing required setting: {setting.upper()}")
        self.setting = setting


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Delivery
    discord_webhook_url: str | None = Field(
        default=None,
        description="Webhook URL the digest is posted to",
    )

    # Calendar source
    calendar_id: str | None = Field(
        default=None,
        description="Google Calendar ID to read events from",
    )
    google_credentials_file: str | None = None
    google_credentials_type: Literal["service_account", "authorized_user"] = (
        "service_account"
    )
    google_calendar_scopes: list[str] = Field(
        default=["https://www.googleapis.com/auth/calendar.readonly"],
        description="Google Calendar API scopes",
    )

    # Schedule
    notification_hour: int = Field(default=8, ge=0, le=23)
    weekly_notification_day: int = Field(
        default=1,
        ge=0,
        le=6,
        description="0=Sunday, 1=Monday, ..., 6=Saturday",
    )

    # Presentation
    locale: Literal["ja", "en"] = "ja"

    log_level: str = "INFO"

    @field_validator("discord_webhook_url", "calendar_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty strings from the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
