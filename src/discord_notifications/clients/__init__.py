"""HTTP clients."""

from discord_notifications.clients.webhook_client import (
    SUCCESS_STATUSES,
    AsyncWebhookClient,
    WebhookResponse,
    parse_retry_after,
)

__all__ = [
    "SUCCESS_STATUSES",
    "AsyncWebhookClient",
    "WebhookResponse",
    "parse_retry_after",
]
