"""Message rendering."""

from discord_notifications.notifications.builder import MessageBuilder, StyleConfig
from discord_notifications.notifications.text import (
    normalize_body,
    rewrite_links,
    strip_line_breaks,
)

__all__ = [
    "MessageBuilder",
    "StyleConfig",
    "normalize_body",
    "rewrite_links",
    "strip_line_breaks",
]
