"""Exceptions subpackage."""

from discord_notifications.exceptions.exceptions import (
    DiscordNotificationsError,
    MissingRequiredConfigError,
    WebhookDeliveryError,
    WebhookTransportError,
)

__all__ = [
    "DiscordNotificationsError",
    "MissingRequiredConfigError",
    "WebhookDeliveryError",
    "WebhookTransportError",
]
