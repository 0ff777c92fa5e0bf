"""Configuration subpackage."""

from discord_notifications.config.config import (
    AppSettings,
    DeliverySettings,
    DiscordSettings,
    EventFilterSettings,
    ExperimentalFeedSettings,
    LoggingSettings,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "AppSettings",
    "DeliverySettings",
    "DiscordSettings",
    "EventFilterSettings",
    "ExperimentalFeedSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
