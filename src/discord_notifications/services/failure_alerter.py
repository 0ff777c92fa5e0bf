# -*- coding: utf-8 -*-
"""DeliveryFailureAlerter: listens to DeliveryFailedEvent and alerts the operators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from discord_notifications.config import Settings, get_settings
from discord_notifications.events.delivery_events import DeliveryFailedEvent
from discord_notifications.exceptions import WebhookTransportError
from discord_notifications.models.action_kind import DEFAULT_COLOR
from discord_notifications.models.message import EmbedField, OutboundMessage
from discord_notifications.utils import mask_webhook_url

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from discord_notifications.clients.webhook_client import AsyncWebhookClient


_OUTCOME_LABELS = {
    "rate_limited": "Rate limit retries exhausted",
    "http_error": "Webhook rejected the message",
    "transport_error": "Webhook unreachable",
}


class DeliveryFailureAlerter:
    """Subscribes to DeliveryFailedEvent and posts a diagnostic to the alert webhook.

    One attempt per alert; a failing alert is logged and never escalated again.
    """

    def __init__(
        self,
        webhook_client: "AsyncWebhookClient",
        event_bus: Any,
        settings_provider: Callable[[], Settings] = get_settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._client = webhook_client
        self._event_bus: "EventBus" = event_bus
        self._settings_provider = settings_provider
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to DeliveryFailedEvent."""
        self._event_bus.on(DeliveryFailedEvent, self._on_failed)
        self._logger.debug("delivery_failure_alerter_started")

    def stop(self) -> None:
        """Unsubscribe from DeliveryFailedEvent."""
        key = DeliveryFailedEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_failed]
        self._logger.debug("delivery_failure_alerter_stopped")

    def build_alert(self, event: DeliveryFailedEvent, settings: Settings) -> OutboundMessage:
        """Build the diagnostic message for a failed destination."""
        label = _OUTCOME_LABELS.get(event.outcome, event.outcome.replace("_", " ").title())
        fields = [
            ("Destination", mask_webhook_url(event.url)),
            ("Action", event.action_kind),
            ("Feed", "experimental" if event.is_experimental else "standard"),
            ("Attempts", str(event.attempts)),
            ("HTTP status", str(event.status_code) if event.status_code is not None else ""),
            ("Error", event.error_message or ""),
        ]
        return OutboundMessage(
            color=DEFAULT_COLOR,
            body_text=f"Notification delivery failed: {label}",
            display_name=settings.discord.from_name or settings.discord.sitename,
            avatar_url=settings.discord.avatar_url or None,
            fields=tuple(EmbedField(name=name, value=value) for name, value in fields if value),
        )

    async def _on_failed(self, event: DeliveryFailedEvent) -> None:
        """Handle DeliveryFailedEvent: build and post the diagnostic message."""
        settings = self._settings_provider()
        alert_url = settings.delivery.alert_webhook_url
        if not alert_url:
            self._logger.warning(
                "delivery_failure_alert_not_configured",
                webhook_url=mask_webhook_url(event.url),
                delivery_outcome=event.outcome,
            )
            return
        if alert_url.strip() == event.url.strip():
            self._logger.error("delivery_failure_alert_destination_failed")
            return

        message = self.build_alert(event, settings)
        try:
            response = await self._client.post_json(alert_url, message.to_json())
        except WebhookTransportError as e:
            self._logger.error(
                "delivery_failure_alert_unreachable",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return

        if not response.ok:
            self._logger.error(
                "delivery_failure_alert_rejected",
                http_status_code=response.status,
            )
            return
        self._logger.info(
            "delivery_failure_alerted",
            webhook_url=mask_webhook_url(event.url),
            delivery_outcome=event.outcome,
        )
