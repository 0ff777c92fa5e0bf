"""Application event bus (bubus).

DeliveryClient publishes DeliveryFailedEvent here; DeliveryFailureAlerter
subscribes. One process-wide instance, replaceable for tests.
"""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

BUS_NAME = "DiscordNotifications"

_event_bus: EventBus | None = None


def create_event_bus(name: str = BUS_NAME, *, max_history_size: int = 100) -> EventBus:
    """Build an in-memory bus (no write-ahead log: failure alerts are best-effort)."""
    return EventBus(name=name, max_history_size=max_history_size, wal_path=None)


def get_event_bus() -> EventBus:
    """Return the application event bus, creating it on first call."""
    global _event_bus
    if _event_bus is None:
        _event_bus = create_event_bus()
    return _event_bus


def set_event_bus(bus: EventBus | None) -> None:
    """Replace the application bus; None resets to a lazily created default."""
    global _event_bus
    _event_bus = bus
