# -*- coding: utf-8 -*-
"""Domain models."""

from discord_notifications.models.action_kind import (
    ACTION_COLORS,
    DEFAULT_COLOR,
    ActionKind,
    color_for,
)
from discord_notifications.models.actor import Actor
from discord_notifications.models.delivery import (
    DeliveryAttempt,
    DeliveryOutcome,
    DeliveryResult,
)
from discord_notifications.models.destination import DestinationSet
from discord_notifications.models.event import NotificationEvent
from discord_notifications.models.message import EmbedField, OutboundMessage

__all__ = [
    "ACTION_COLORS",
    "DEFAULT_COLOR",
    "ActionKind",
    "Actor",
    "DeliveryAttempt",
    "DeliveryOutcome",
    "DeliveryResult",
    "DestinationSet",
    "EmbedField",
    "NotificationEvent",
    "OutboundMessage",
    "color_for",
]
