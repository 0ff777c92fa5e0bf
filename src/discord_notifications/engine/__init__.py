"""Notification dispatch engine."""

from discord_notifications.engine.dispatch_engine import DispatchEngine

__all__ = ["DispatchEngine"]
