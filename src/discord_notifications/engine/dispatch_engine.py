# -*- coding: utf-8 -*-
"""DispatchEngine: the notify(event) entry point.

Flow: enabled/title checks -> ConditionEvaluator -> MessageBuilder ->
EndpointResolver -> DeliveryClient. Suppressed events stop before any
formatting work. Delivery problems never reach the caller.
"""

from __future__ import annotations

import asyncio
import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional
from structlog.contextvars import bound_contextvars

from discord_notifications.config import Settings, get_settings
from discord_notifications.exceptions import MissingRequiredConfigError
from discord_notifications.notifications.builder import MessageBuilder, StyleConfig
from discord_notifications.policy.condition_evaluator import ConditionEvaluator
from discord_notifications.policy.title_filter import TitleFilter
from discord_notifications.routing.endpoint_resolver import EndpointResolver
from discord_notifications.utils import is_webhook_url

if TYPE_CHECKING:
    from discord_notifications.delivery.delivery_client import DeliveryClient
    from discord_notifications.models.delivery import DeliveryResult
    from discord_notifications.models.event import NotificationEvent

_TitleFilterKey = tuple[tuple[str, ...], tuple[str, ...]]


class DispatchEngine:
    """Orchestrates suppression, rendering, routing and delivery for one event.

    Settings are read from the provider on every call so configuration
    changes apply without a restart. The primary webhook is checked once at
    construction.
    """

    def __init__(
        self,
        delivery_client: "DeliveryClient",
        settings_provider: Callable[[], Settings] = get_settings,
        *,
        evaluator: Optional[ConditionEvaluator] = None,
        builder: Optional[MessageBuilder] = None,
        resolver: Optional[EndpointResolver] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the engine.

        Raises:
            MissingRequiredConfigError: If DISCORD__WEBHOOK_URL is not a usable URL.
        """
        self._delivery = delivery_client
        self._settings_provider = settings_provider
        self._evaluator = evaluator or ConditionEvaluator()
        self._builder = builder or MessageBuilder()
        self._resolver = resolver or EndpointResolver()
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._title_filter: Optional[tuple[_TitleFilterKey, TitleFilter]] = None

        if not is_webhook_url(settings_provider().discord.webhook_url):
            self._logger.error(
                "dispatch_missing_webhook_url",
                message="DISCORD__WEBHOOK_URL is not set",
            )
            raise MissingRequiredConfigError("DISCORD__WEBHOOK_URL")

    async def notify(self, event: "NotificationEvent") -> None:
        """Dispatch event; best-effort, never raises (except on cancellation)."""
        try:
            await self.dispatch(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.exception(
                "dispatch_unexpected_error",
                action_kind=event.action_kind.value,
                error_type=type(e).__name__,
                error_message=str(e),
            )

    async def dispatch(self, event: "NotificationEvent") -> list["DeliveryResult"]:
        """Run the full pipeline for event and return per-destination results.

        Returns an empty list when the event is disabled, excluded, suppressed
        or has no destination.
        """
        settings = self._settings_provider()
        kind = event.action_kind

        with bound_contextvars(
            action_kind=kind.value,
            is_experimental=event.is_experimental,
        ):
            if not settings.events.is_enabled(kind.value):
                self._logger.debug("dispatch_action_disabled")
                return []

            if self._title_filter_for(settings).is_excluded(event.page_title):
                self._logger.debug("dispatch_title_excluded", page_title=event.page_title)
                return []

            verdict = self._evaluator.evaluate(
                event.actor,
                kind,
                event.is_experimental,
                settings.exclusions,
            )
            if verdict.suppressed:
                self._logger.info(
                    "dispatch_suppressed",
                    actor=event.actor.name,
                    reason=verdict.reason,
                )
                return []

            message = self._builder.build(event, StyleConfig.from_settings(settings))
            destinations = self._resolver.resolve(event, settings)
            if destinations.is_empty:
                self._logger.warning("dispatch_no_destinations")
                return []

            results = await self._delivery.deliver(
                message,
                destinations,
                action_kind=kind.value,
                is_experimental=event.is_experimental,
            )
            delivered = sum(1 for r in results if r.delivered)
            self._logger.info(
                "dispatch_completed",
                destinations_reason=destinations.reason,
                destinations_count=len(destinations),
                delivered_count=delivered,
                failed_count=len(results) - delivered,
            )
            return results

    def _title_filter_for(self, settings: Settings) -> TitleFilter:
        """Return the TitleFilter for the current exclusions, rebuilt only when they change."""
        events = settings.events
        key = (tuple(events.excluded_title_prefixes), tuple(events.excluded_title_patterns))
        if self._title_filter is None or self._title_filter[0] != key:
            self._title_filter = (key, TitleFilter.from_settings(settings))
        return self._title_filter[1]
