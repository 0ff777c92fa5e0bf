# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from discord_notifications.config import Settings
from discord_notifications.events.bus import create_event_bus
from discord_notifications.models.actor import Actor
from discord_notifications.models.event import NotificationEvent


@pytest.fixture
def primary_url() -> str:
    """Primary webhook URL configured by settings_factory."""
    return "https://discord.com/api/webhooks/100/primary-token"


@pytest.fixture
def settings_factory(primary_url: str) -> Callable[..., Settings]:
    """Build Settings with a valid primary webhook and per-section overrides.

    Example: settings_factory(discord={"additional_webhook_urls": "a,b"}, delivery={"max_retries": 1})
    """

    def _build(**sections: Any) -> Settings:
        discord = {"webhook_url": primary_url, **sections.pop("discord", {})}
        return Settings.from_env(discord=discord, **sections)

    return _build


@pytest.fixture
def actor_factory() -> Callable[..., Actor]:
    """Build a registered Actor; groups and permissions default to empty."""

    def _build(name: str = "Alice", **overrides: Any) -> Actor:
        return Actor.create(name, **overrides)

    return _build


@pytest.fixture
def event_factory(actor_factory: Callable[..., Actor]) -> Callable[..., NotificationEvent]:
    """Build an article_saved NotificationEvent with easy overrides."""

    def _build(**overrides: Any) -> NotificationEvent:
        return NotificationEvent.create(
            actor=overrides.pop("actor", None) or actor_factory(),
            action_kind=overrides.pop("action_kind", "article_saved"),
            rendered_text=overrides.pop(
                "rendered_text",
                "Alice saved <https://wiki.example/Main_Page|Main Page>",
            ),
            structured_fields=overrides.pop("structured_fields", {"Summary": "typo fix"}),
            explicit_destination=overrides.pop("explicit_destination", None),
            is_experimental=overrides.pop("is_experimental", False),
            page_title=overrides.pop("page_title", "Main Page"),
        )

    return _build


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return create_event_bus("DiscordNotificationsTests", max_history_size=200)
