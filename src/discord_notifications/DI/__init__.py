"""Dependency injection."""

from discord_notifications.DI.container import Container

__all__ = ["Container"]
