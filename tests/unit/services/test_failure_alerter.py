# -*- coding: utf-8 -*-
"""Unit tests for DeliveryFailureAlerter."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, Mock

from discord_notifications.clients.webhook_client import WebhookResponse
from discord_notifications.events.delivery_events import DeliveryFailedEvent
from discord_notifications.exceptions import WebhookTransportError
from discord_notifications.services.failure_alerter import DeliveryFailureAlerter

ALERT_URL = "https://discord.com/api/webhooks/900/ops-token"
FAILED_URL = "https://discord.com/api/webhooks/200/mirror-secret"


class _FakeEventBus:
    """Minimal event bus fake for unit tests."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Any]] = {}

    def on(self, event_type: type[Any], handler: Any) -> None:
        key = event_type.__name__
        self.handlers.setdefault(key, []).append(handler)


class _TestableAlerter(DeliveryFailureAlerter):
    """Test wrapper exposing the event handler."""

    async def on_failed_public(self, event: DeliveryFailedEvent) -> None:
        await self._on_failed(event)


def _event(**overrides: Any) -> DeliveryFailedEvent:
    values: dict[str, Any] = {
        "url": FAILED_URL,
        "outcome": "rate_limited",
        "status_code": 429,
        "attempts": 6,
        "error_message": "still rate limited after 6 attempts (retry_after=1.0)",
        "action_kind": "article_saved",
    }
    values.update(overrides)
    return DeliveryFailedEvent(**values)


def _alerter(settings: Any, webhook_client: Any, **kwargs: Any) -> _TestableAlerter:
    return _TestableAlerter(
        webhook_client=webhook_client,
        event_bus=kwargs.pop("event_bus", _FakeEventBus()),
        settings_provider=lambda: settings,
        **kwargs,
    )


def test_start_and_stop_manage_subscription(settings_factory: Callable[..., Any]) -> None:
    bus = _FakeEventBus()
    alerter = _alerter(settings_factory(), AsyncMock(), event_bus=bus)

    alerter.start()
    assert len(bus.handlers["DeliveryFailedEvent"]) == 1

    alerter.stop()
    assert bus.handlers["DeliveryFailedEvent"] == []


def test_build_alert_masks_url_and_drops_empty_fields(settings_factory: Callable[..., Any]) -> None:
    settings = settings_factory(discord={"sitename": "Example Wiki"})
    alerter = _alerter(settings, AsyncMock())

    message = alerter.build_alert(
        _event(outcome="transport_error", status_code=None, error_message=None),
        settings,
    )

    assert message.color == 11777212
    assert message.display_name == "Example Wiki"
    assert message.body_text == "Notification delivery failed: Webhook unreachable"
    fields = {f.name: f.value for f in message.fields}
    assert fields["Destination"] == "https://discord.com/api/webhooks/200/***"
    assert fields["Feed"] == "standard"
    assert "HTTP status" not in fields
    assert "Error" not in fields
    assert "mirror-secret" not in message.to_json().decode("utf-8")


async def test_failure_posts_one_alert(settings_factory: Callable[..., Any]) -> None:
    settings = settings_factory(delivery={"alert_webhook_url": ALERT_URL})
    webhook_client = AsyncMock()
    webhook_client.post_json.return_value = WebhookResponse(status=204)

    await _alerter(settings, webhook_client).on_failed_public(_event())

    webhook_client.post_json.assert_awaited_once()
    url, body = webhook_client.post_json.await_args.args
    assert url == ALERT_URL
    payload = json.loads(body)
    assert payload["embeds"][0]["description"] == (
        "Notification delivery failed: Rate limit retries exhausted"
    )


async def test_no_alert_url_only_logs(settings_factory: Callable[..., Any]) -> None:
    logger = Mock()
    webhook_client = AsyncMock()

    await _alerter(
        settings_factory(),
        webhook_client,
        get_logger=Mock(return_value=logger),
    ).on_failed_public(_event())

    webhook_client.post_json.assert_not_awaited()
    assert logger.warning.call_args.args[0] == "delivery_failure_alert_not_configured"


async def test_failing_alert_destination_is_not_alerted_again(
    settings_factory: Callable[..., Any],
) -> None:
    settings = settings_factory(delivery={"alert_webhook_url": ALERT_URL})
    webhook_client = AsyncMock()

    await _alerter(settings, webhook_client).on_failed_public(_event(url=ALERT_URL))

    webhook_client.post_json.assert_not_awaited()


async def test_alert_errors_are_logged_not_raised(settings_factory: Callable[..., Any]) -> None:
    settings = settings_factory(delivery={"alert_webhook_url": ALERT_URL})
    logger = Mock()
    webhook_client = AsyncMock()
    webhook_client.post_json.side_effect = WebhookTransportError("POST failed", url=ALERT_URL)

    await _alerter(
        settings,
        webhook_client,
        get_logger=Mock(return_value=logger),
    ).on_failed_public(_event())

    webhook_client.post_json.assert_awaited_once()
    assert logger.error.call_args.args[0] == "delivery_failure_alert_unreachable"
