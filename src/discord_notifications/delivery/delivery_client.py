# -*- coding: utf-8 -*-
"""DeliveryClient: posts a message to every destination with bounded rate-limit retries."""

from __future__ import annotations

import asyncio
import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional
from structlog.contextvars import bound_contextvars

from discord_notifications.config import Settings, get_settings
from discord_notifications.events.delivery_events import DeliveryFailedEvent
from discord_notifications.exceptions import WebhookTransportError
from discord_notifications.models.delivery import (
    DeliveryAttempt,
    DeliveryOutcome,
    DeliveryResult,
)
from discord_notifications.utils import mask_webhook_url

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from discord_notifications.clients.webhook_client import AsyncWebhookClient
    from discord_notifications.models.destination import DestinationSet
    from discord_notifications.models.message import OutboundMessage


class DeliveryClient:
    """Delivers one serialized message to each destination independently.

    Per destination: POST; 200/204 is success; a retry_after body means sleep
    and retry the same destination, up to delivery.max_retries retries, each
    wait at most delivery.max_retry_after_seconds. Anything else (exhausted
    cap, over-long wait, transport error) abandons the destination and
    publishes DeliveryFailedEvent. Never raises to the caller.
    """

    def __init__(
        self,
        webhook_client: "AsyncWebhookClient",
        event_bus: Any = None,
        settings_provider: Callable[[], Settings] = get_settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._client = webhook_client
        self._event_bus: Optional["EventBus"] = event_bus
        self._settings_provider = settings_provider
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def deliver(
        self,
        message: "OutboundMessage",
        destinations: "DestinationSet",
        *,
        action_kind: str = "default",
        is_experimental: bool = False,
    ) -> list[DeliveryResult]:
        """Send message to every destination; return one result per destination.

        Args:
            message: Message to send (serialized once).
            destinations: Resolved destination URLs.
            action_kind: Action kind, reported on failure events.
            is_experimental: Experimental feed flag, reported on failure events.

        Returns:
            DeliveryResult list in destination order.
        """
        if destinations.is_empty:
            return []

        settings = self._settings_provider()
        body = message.to_json()
        max_attempts = settings.delivery.max_attempts
        max_wait = settings.delivery.max_retry_after_seconds
        urls = list(destinations)

        async def _one(url: str) -> DeliveryResult:
            return await self._deliver_one(
                url,
                body,
                max_attempts,
                max_wait,
                action_kind=action_kind,
                is_experimental=is_experimental,
            )

        if settings.delivery.concurrent and len(urls) > 1:
            gathered = await asyncio.gather(
                *(_one(url) for url in urls),
                return_exceptions=True,
            )
        else:
            gathered = []
            for url in urls:
                try:
                    gathered.append(await _one(url))
                except Exception as e:
                    gathered.append(e)

        results: list[DeliveryResult] = []
        for url, item in zip(urls, gathered):
            if isinstance(item, DeliveryResult):
                results.append(item)
                continue
            if isinstance(item, asyncio.CancelledError):
                raise item
            self._logger.error(
                "delivery_unexpected_error",
                webhook_url=mask_webhook_url(url),
                error_type=type(item).__name__,
                error_message=str(item),
            )
            results.append(
                self._failed(
                    url,
                    DeliveryOutcome.TRANSPORT_ERROR,
                    (),
                    f"{type(item).__name__}: {item}",
                    action_kind=action_kind,
                    is_experimental=is_experimental,
                )
            )
        return results

    async def _deliver_one(
        self,
        url: str,
        body: bytes,
        max_attempts: int,
        max_wait: float,
        *,
        action_kind: str,
        is_experimental: bool,
    ) -> DeliveryResult:
        attempts: list[DeliveryAttempt] = []
        with bound_contextvars(
            webhook_url=mask_webhook_url(url),
            delivery_max_attempts=max_attempts,
            action_kind=action_kind,
        ):
            attempt = 0
            while True:
                attempt += 1
                with bound_contextvars(delivery_attempt=attempt):
                    try:
                        response = await self._client.post_json(url, body)
                    except WebhookTransportError as e:
                        attempts.append(DeliveryAttempt(url=url, attempt=attempt, status=None))
                        return self._failed(
                            url,
                            DeliveryOutcome.TRANSPORT_ERROR,
                            tuple(attempts),
                            str(e),
                            action_kind=action_kind,
                            is_experimental=is_experimental,
                        )

                    retry_after = response.retry_after
                    attempts.append(
                        DeliveryAttempt(
                            url=url,
                            attempt=attempt,
                            status=response.status,
                            retry_after=retry_after,
                        )
                    )

                    if response.ok:
                        self._logger.debug("delivery_succeeded", http_status_code=response.status)
                        return DeliveryResult(
                            url=url,
                            outcome=DeliveryOutcome.DELIVERED,
                            attempts=tuple(attempts),
                        )

                    if retry_after is None:
                        return self._failed(
                            url,
                            DeliveryOutcome.HTTP_ERROR,
                            tuple(attempts),
                            f"HTTP {response.status}: {response.text[:120]}",
                            action_kind=action_kind,
                            is_experimental=is_experimental,
                        )

                    if retry_after > max_wait:
                        reason = f"retry_after={retry_after} exceeds the {max_wait}s limit"
                    elif attempt >= max_attempts:
                        reason = f"still rate limited after {attempt} attempts (retry_after={retry_after})"
                    else:
                        reason = None
                    if reason is not None:
                        return self._failed(
                            url,
                            DeliveryOutcome.RATE_LIMITED,
                            tuple(attempts),
                            reason,
                            action_kind=action_kind,
                            is_experimental=is_experimental,
                        )

                    self._logger.warning(
                        "delivery_rate_limited",
                        http_status_code=response.status,
                        http_retry_after_seconds=retry_after,
                    )
                    await asyncio.sleep(retry_after)

    def _failed(
        self,
        url: str,
        outcome: DeliveryOutcome,
        attempts: tuple[DeliveryAttempt, ...],
        error_message: str,
        *,
        action_kind: str,
        is_experimental: bool,
    ) -> DeliveryResult:
        """Log, publish DeliveryFailedEvent and build the failed result."""
        result = DeliveryResult(
            url=url,
            outcome=outcome,
            attempts=attempts,
            error_message=error_message,
        )
        self._logger.error(
            "delivery_failed",
            webhook_url=mask_webhook_url(url),
            delivery_outcome=outcome.value,
            http_status_code=result.last_status,
            delivery_attempts=len(attempts),
            error_message=error_message,
        )
        if self._event_bus is not None:
            self._event_bus.dispatch(
                DeliveryFailedEvent(
                    url=url,
                    outcome=outcome.value,
                    status_code=result.last_status,
                    attempts=len(attempts),
                    error_message=error_message,
                    action_kind=action_kind,
                    is_experimental=is_experimental,
                )
            )
        return result
