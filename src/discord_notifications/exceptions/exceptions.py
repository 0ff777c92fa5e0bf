"""Custom exceptions for webhook delivery and configuration."""

from __future__ import annotations


class DiscordNotificationsError(Exception):
    """Base exception for notification dispatch errors."""

    pass


class MissingRequiredConfigError(DiscordNotificationsError):
    """Raised when a required configuration value is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing required configuration: {setting}")
        self.setting = setting


class WebhookDeliveryError(DiscordNotificationsError):
    """Raised when a webhook request cannot be completed."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class WebhookTransportError(WebhookDeliveryError):
    """Raised on connection errors and timeouts (no HTTP response received)."""

    pass

