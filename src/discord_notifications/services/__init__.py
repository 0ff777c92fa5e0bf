"""Event-driven services."""

from discord_notifications.services.failure_alerter import DeliveryFailureAlerter

__all__ = ["DeliveryFailureAlerter"]
