"""Logging subpackage."""

from discord_notifications.logging.config import configure_logging

__all__ = ["configure_logging"]
