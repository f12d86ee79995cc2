"""Application configuration settings."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_PUSH_ICON = "https://i.imgur.com/7D8u8h6.png"


class Settings(BaseSettings):
    """Relay configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    firebase_service_account: str | None = Field(
        default=None,
        description="Service account JSON used to authenticate against Firebase",
    )
    firebase_database_url: str | None = Field(
        default=None,
        description="URL of the Firebase Realtime Database holding the change feeds",
    )
    change_feed_backend: Literal["firebase", "memory"] = Field(
        default="firebase",
        description="Store watched for new notification and message records",
    )
    push_backend: Literal["fcm", "dry_run"] = Field(
        default="fcm",
        description="Transport used to deliver push notifications",
    )
    push_icon_url: str = Field(default=DEFAULT_PUSH_ICON, min_length=1)
    push_badge_url: str = Field(default=DEFAULT_PUSH_ICON, min_length=1)
    push_click_link: str = Field(
        default="/", description="Link opened when a web push is clicked"
    )
    push_retry_attempts: int = Field(
        default=0,
        ge=0,
        description="Extra delivery attempts after a transient provider failure",
    )
    push_retry_backoff_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Delay before the first retry; doubled after every attempt",
    )
    keepalive_url: str | None = Field(
        default=None,
        description="Public base URL of this service, pinged to keep the host awake",
    )
    keepalive_interval_seconds: float = Field(default=14 * 60, gt=0)
    log_level: str = Field(default="INFO")
    relay_autostart: bool = Field(
        default=True,
        description="Start the change feed watcher together with the HTTP app",
    )

    @model_validator(mode="after")
    def _validate_firebase_configuration(self) -> "Settings":
        uses_firebase = (
            self.change_feed_backend == "firebase" or self.push_backend == "fcm"
        )
        if uses_firebase and not self.firebase_service_account:
            raise ValueError(
                "FIREBASE_SERVICE_ACCOUNT is required for the firebase and fcm backends"
            )
        if self.change_feed_backend == "firebase" and not self.firebase_database_url:
            raise ValueError(
                "FIREBASE_DATABASE_URL is required for the firebase change feed"
            )
        if self.firebase_service_account:
            self.service_account_info()
        return self

    def service_account_info(self) -> dict[str, Any]:
        """Return the decoded service account credential blob."""

        if not self.firebase_service_account:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT is not configured")
        try:
            info = json.loads(self.firebase_service_account)
        except json.JSONDecodeError as exc:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT must be valid JSON") from exc
        if not isinstance(info, dict):
            raise ValueError("FIREBASE_SERVICE_ACCOUNT must be a JSON object")
        return info


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
