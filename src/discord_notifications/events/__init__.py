# -*- coding: utf-8 -*-
"""Event bus and event types."""

from discord_notifications.events.bus import create_event_bus, get_event_bus, set_event_bus
from discord_notifications.events.delivery_events import DeliveryFailedEvent

__all__ = ["create_event_bus", "get_event_bus", "set_event_bus", "DeliveryFailedEvent"]
