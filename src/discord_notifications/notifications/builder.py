# -*- coding: utf-8 -*-
"""MessageBuilder: renders a NotificationEvent into an OutboundMessage.

Pure and total: no I/O, and any well-formed event produces a message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from discord_notifications.models.action_kind import color_for
from discord_notifications.models.message import EmbedField, OutboundMessage
from discord_notifications.notifications.text import normalize_body

if TYPE_CHECKING:
    from discord_notifications.config.config import Settings
    from discord_notifications.models.event import NotificationEvent

DEFAULT_EXPERIMENTAL_FOOTER = "Experimental feed: contact the wiki operators about any issues."


@dataclass(frozen=True)
class StyleConfig:
    """Sender identity and footer options used when building messages."""

    sitename: str
    from_name: str = ""
    avatar_url: Optional[str] = None
    footer_text: str = ""
    disable_footer: bool = False
    experimental_footer_text: str = ""

    @property
    def display_name(self) -> str:
        return self.from_name or self.sitename

    @classmethod
    def from_settings(cls, settings: "Settings") -> StyleConfig:
        discord = settings.discord
        return cls(
            sitename=discord.sitename,
            from_name=discord.from_name,
            avatar_url=discord.avatar_url or None,
            footer_text=discord.footer_text,
            disable_footer=discord.disable_footer,
            experimental_footer_text=settings.experimental.footer_text,
        )


class MessageBuilder:
    """Builds embed messages with category colours."""

    def build(self, event: "NotificationEvent", style: StyleConfig) -> OutboundMessage:
        """Return the OutboundMessage for event.

        Steps: colour from the action kind table; display name from the
        override or the site name; body with link markup rewritten and line
        breaks removed; empty fields dropped (order kept); footer per feed.
        """
        return OutboundMessage(
            color=color_for(event.action_kind),
            body_text=normalize_body(event.rendered_text),
            display_name=style.display_name,
            avatar_url=style.avatar_url or None,
            fields=self._fields(event.structured_fields),
            footer_text=self._footer(event, style),
        )

    @staticmethod
    def _fields(pairs: tuple[tuple[str, Any], ...]) -> tuple[EmbedField, ...]:
        # Empty values are never emitted.
        return tuple(
            EmbedField(name=name, value=str(value))
            for name, value in pairs
            if value
        )

    @staticmethod
    def _footer(event: "NotificationEvent", style: StyleConfig) -> Optional[str]:
        if event.is_experimental:
            # The contact footer is mandatory on the experimental feed.
            return (
                style.experimental_footer_text
                or style.footer_text
                or DEFAULT_EXPERIMENTAL_FOOTER
            )
        if style.disable_footer or not style.footer_text:
            return None
        return style.footer_text
