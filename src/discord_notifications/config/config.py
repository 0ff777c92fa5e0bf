# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. DISCORD__WEBHOOK_URL, DELIVERY__MAX_RETRIES.
Structured values (EXCLUSIONS, DISCORD__ACTION_WEBHOOK_URLS, EVENTS__ENABLED_ACTIONS)
are given as JSON. An EXCLUSIONS value that is not valid JSON is logged and
read as an empty policy instead of failing startup.
"""

from __future__ import annotations

import json
import structlog
from functools import lru_cache
from typing import Annotated, Any, Literal, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from discord_notifications.policy.exclusion_policy import ExclusionPolicy


def _split_csv(raw: str) -> list[str]:
    """Parse a comma-separated string into a list of stripped, non-empty entries."""
    if not raw or not raw.strip():
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def _join_list(value: Any) -> Any:
    """Accept a list where a comma-separated string is stored."""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value if v)
    return value


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "discord-notifications"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/discord_notifications.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class DiscordSettings(BaseSettings):
    """Webhook destinations and message styling (from env DISCORD__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    webhook_url: str = Field(
        default="",
        description="Primary incoming webhook URL. Required.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    additional_webhook_urls_raw: str = Field(
        default="",
        description="Mirror webhook URLs, comma-separated. Env: DISCORD__ADDITIONAL_WEBHOOK_URLS.",
        validation_alias="additional_webhook_urls",
    )
    action_webhook_urls: dict[str, str] = Field(
        default_factory=dict,
        description="Dedicated webhook per action kind, e.g. {\"user_blocked\": \"https://...\"}.",
    )
    proxy: Optional[str] = Field(default=None, description="HTTP proxy for webhook requests.")
    from_name: str = Field(default="", description="Sender display name override.")
    sitename: str = Field(default="Wiki", description="Host site name, used when from_name is empty.")
    avatar_url: Optional[str] = Field(default=None, description="Sender avatar URL.")
    disable_footer: bool = False
    footer_text: str = Field(
        default="DiscordNotifications: report issues to the wiki operators.",
        description="Footer attached to standard feed messages.",
    )

    @field_validator("additional_webhook_urls_raw", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _join_list(value)

    @computed_field
    @property
    def additional_webhook_urls(self) -> list[str]:
        """Parse comma-separated additional_webhook_urls_raw into a list of URLs."""
        return _split_csv(self.additional_webhook_urls_raw)


class ExperimentalFeedSettings(BaseSettings):
    """Experimental (CVT) feed destinations (from env EXPERIMENTAL__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    webhook_urls_raw: str = Field(
        default="",
        description="Experimental feed webhook URLs, comma-separated. Env: EXPERIMENTAL__WEBHOOK_URLS.",
        validation_alias="webhook_urls",
    )
    footer_text: str = Field(
        default="Experimental feed: contact the wiki operators about any issues.",
        description="Contact footer; always attached to experimental feed messages.",
    )
    echo_to_default_feed: bool = Field(
        default=False,
        description="Also send experimental events to the primary webhook and its mirrors.",
    )

    @field_validator("webhook_urls_raw", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _join_list(value)

    @computed_field
    @property
    def webhook_urls(self) -> list[str]:
        """Parse comma-separated webhook_urls_raw into a list of URLs."""
        return _split_csv(self.webhook_urls_raw)


class DeliverySettings(BaseSettings):
    """HTTP delivery and retry policy (from env DELIVERY__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_seconds: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="Connect and total request timeout in seconds.",
    )
    max_retries: int = Field(
        default=5,
        ge=0,
        le=10,
        description="Retries per destination after a retry_after response.",
    )
    max_retry_after_seconds: float = Field(
        default=60.0,
        ge=0.0,
        le=3600.0,
        description="Longest single retry_after wait honoured; a longer wait abandons the destination.",
    )
    alert_webhook_url: Optional[str] = Field(
        default=None,
        description="Operator webhook that receives delivery failure diagnostics.",
    )
    concurrent: bool = Field(
        default=True,
        description="Deliver to all destinations concurrently instead of one by one.",
    )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


class EventFilterSettings(BaseSettings):
    """Per-action switches and page title exclusions (from env EVENTS__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled_actions: dict[str, bool] = Field(
        default_factory=dict,
        description="Action kind -> enabled. Missing kinds are enabled.",
    )
    excluded_title_prefixes_raw: str = Field(
        default="",
        description="Title prefixes to skip, comma-separated. Env: EVENTS__EXCLUDED_TITLE_PREFIXES.",
        validation_alias="excluded_title_prefixes",
    )
    excluded_title_patterns: list[str] = Field(
        default_factory=list,
        description="Regular expressions; titles matching any of them are skipped (JSON list).",
    )

    @field_validator("excluded_title_prefixes_raw", mode="before")
    @classmethod
    def _accept_list(cls, value: Any) -> Any:
        return _join_list(value)

    @computed_field
    @property
    def excluded_title_prefixes(self) -> list[str]:
        return _split_csv(self.excluded_title_prefixes_raw)

    def is_enabled(self, action_kind: str) -> bool:
        return bool(self.enabled_actions.get(action_kind, True))


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. DISCORD__WEBHOOK_URL, DELIVERY__MAX_RETRIES.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    experimental: ExperimentalFeedSettings = Field(default_factory=ExperimentalFeedSettings)
    delivery: DeliverySettings = Field(default_factory=DeliverySettings)
    exclusions: Annotated[ExclusionPolicy, NoDecode] = Field(default_factory=ExclusionPolicy)
    events: EventFilterSettings = Field(default_factory=EventFilterSettings)

    @field_validator("exclusions", mode="before")
    @classmethod
    def _decode_exclusions(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        if not value.strip():
            return {}
        try:
            return json.loads(value)
        except ValueError as e:
            structlog.get_logger("Settings").warning(
                "exclusions_invalid_json",
                error_message=str(e),
            )
            return {}

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(delivery={"max_retries": 3})
        - from_env(discord={"webhook_url": "https://discord.com/api/webhooks/1/abc"})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from discord_notifications.config import get_settings

        settings = get_settings()
        webhook = settings.discord.webhook_url
        max_retries = settings.delivery.max_retries
    """
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached Settings so the next read sees changed configuration."""
    get_settings.cache_clear()
    return get_settings()
