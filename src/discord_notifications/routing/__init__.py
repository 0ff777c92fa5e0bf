"""Destination routing."""

from discord_notifications.routing.endpoint_resolver import EndpointResolver

__all__ = ["EndpointResolver"]
