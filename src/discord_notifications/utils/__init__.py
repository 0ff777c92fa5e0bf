# -*- coding: utf-8 -*-
"""Utility modules."""

from discord_notifications.utils.validation import is_webhook_url, mask_webhook_url

__all__ = ["is_webhook_url", "mask_webhook_url"]
