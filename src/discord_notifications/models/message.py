# -*- coding: utf-8 -*-
"""OutboundMessage: the rendered embed and its wire encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class EmbedField:
    """One name/value pair shown in the embed."""

    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass(frozen=True, slots=True)
class OutboundMessage:
    """Immutable message ready to be posted to webhook destinations.

    Serialization is deterministic: the same message always encodes to the
    same bytes, and field order is preserved.
    """

    color: int
    body_text: str
    display_name: str
    avatar_url: Optional[str] = None
    fields: tuple[EmbedField, ...] = ()
    footer_text: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        """Return the webhook JSON structure (footer/avatar keys omitted when absent)."""
        embed: dict[str, Any] = {
            "color": self.color,
            "description": self.body_text,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.footer_text:
            embed["footer"] = {"text": self.footer_text}
        payload: dict[str, Any] = {
            "embeds": [embed],
            "username": self.display_name,
        }
        if self.avatar_url:
            payload["avatar_url"] = self.avatar_url
        return payload

    def to_json(self) -> bytes:
        """Encode the payload as UTF-8 JSON bytes."""
        return json.dumps(
            self.to_payload(),
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> OutboundMessage:
        """Parse a webhook payload produced by to_payload()."""
        embeds = payload.get("embeds") or [{}]
        embed = embeds[0]
        footer = embed.get("footer") or {}
        return cls(
            color=int(embed.get("color", 0)),
            body_text=str(embed.get("description", "")),
            display_name=str(payload.get("username", "")),
            avatar_url=payload.get("avatar_url"),
            fields=tuple(
                EmbedField(
                    name=str(f.get("name", "")),
                    value=str(f.get("value", "")),
                    inline=bool(f.get("inline", False)),
                )
                for f in embed.get("fields") or []
            ),
            footer_text=footer.get("text"),
        )
