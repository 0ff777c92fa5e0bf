# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from discord_notifications.clients.webhook_client import AsyncWebhookClient
from discord_notifications.config import get_settings
from discord_notifications.delivery.delivery_client import DeliveryClient
from discord_notifications.engine.dispatch_engine import DispatchEngine
from discord_notifications.events.bus import get_event_bus
from discord_notifications.notifications.builder import MessageBuilder
from discord_notifications.policy.condition_evaluator import ConditionEvaluator
from discord_notifications.routing.endpoint_resolver import EndpointResolver
from discord_notifications.services.failure_alerter import DeliveryFailureAlerter


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, webhook client, pipeline stages and engine.

    Components receive a settings provider (not a snapshot) so every call sees
    the current configuration.
    """

    settings_provider = providers.Object(get_settings)

    event_bus = providers.Callable(get_event_bus)

    webhook_client = providers.Singleton(
        AsyncWebhookClient,
        settings_provider=settings_provider,
    )

    message_builder = providers.Singleton(MessageBuilder)

    endpoint_resolver = providers.Singleton(EndpointResolver)

    condition_evaluator = providers.Singleton(ConditionEvaluator)

    delivery_client = providers.Singleton(
        DeliveryClient,
        webhook_client=webhook_client,
        event_bus=event_bus,
        settings_provider=settings_provider,
    )

    failure_alerter = providers.Singleton(
        DeliveryFailureAlerter,
        webhook_client=webhook_client,
        event_bus=event_bus,
        settings_provider=settings_provider,
    )

    dispatch_engine = providers.Singleton(
        DispatchEngine,
        delivery_client=delivery_client,
        settings_provider=settings_provider,
        evaluator=condition_evaluator,
        builder=message_builder,
        resolver=endpoint_resolver,
    )
