"""Webhook delivery with retry policy."""

from discord_notifications.delivery.delivery_client import DeliveryClient

__all__ = ["DeliveryClient"]
