# -*- coding: utf-8 -*-
"""NotificationEvent: the input unit handed to the dispatch engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from discord_notifications.models.action_kind import ActionKind
from discord_notifications.models.actor import Actor

FieldsInput = Union[Mapping[str, Any], Iterable[Any], None]


def _field_pair(item: Any) -> tuple[str, Any]:
    """Accept a (name, value) pair or a {"name": ..., "value": ...} object."""
    if isinstance(item, Mapping):
        if "name" not in item:
            raise ValueError(f"structured field object without a name: {item!r}")
        return str(item["name"]), item.get("value")
    if isinstance(item, (str, bytes)) or not isinstance(item, Iterable):
        raise ValueError(f"structured field must be a (name, value) pair, got {item!r}")
    pair = tuple(item)
    if len(pair) != 2:
        raise ValueError(f"structured field must be a (name, value) pair, got {item!r}")
    return str(pair[0]), pair[1]


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """One platform event, already rendered and localised by the caller.

    structured_fields keeps insertion order; values are kept as given and
    filtered for emptiness by the message builder.
    """

    actor: Actor
    action_kind: ActionKind
    rendered_text: str
    structured_fields: tuple[tuple[str, Any], ...] = ()
    explicit_destination: Optional[str] = None
    """Override URL; when set it is the only destination (no mirrors)."""
    is_experimental: bool = False
    """True when the event is offered to the experimental (CVT) feed."""
    page_title: Optional[str] = None
    """Title of the page the event concerns, for title exclusion."""

    @classmethod
    def create(
        cls,
        *,
        actor: Actor,
        action_kind: ActionKind | str,
        rendered_text: str,
        structured_fields: FieldsInput = None,
        explicit_destination: Optional[str] = None,
        is_experimental: bool = False,
        page_title: Optional[str] = None,
    ) -> NotificationEvent:
        """Create an event from a mapping (or pairs, or name/value objects) of fields.

        Raises:
            ValueError: If a field entry has neither shape.
        """
        if structured_fields is None:
            pairs: tuple[tuple[str, Any], ...] = ()
        elif isinstance(structured_fields, Mapping):
            pairs = tuple((str(k), v) for k, v in structured_fields.items())
        else:
            pairs = tuple(_field_pair(item) for item in structured_fields)
        destination = explicit_destination.strip() if explicit_destination else None
        return cls(
            actor=actor,
            action_kind=ActionKind.parse(action_kind),
            rendered_text=rendered_text,
            structured_fields=pairs,
            explicit_destination=destination or None,
            is_experimental=is_experimental,
            page_title=page_title,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NotificationEvent:
        """Build an event from a JSON-like document (used by the command line)."""
        actor_data = data.get("actor") or {}
        actor = Actor.create(
            str(actor_data.get("name", "")),
            is_registered=bool(actor_data.get("is_registered", bool(actor_data.get("name")))),
            groups=actor_data.get("groups") or (),
            permissions=actor_data.get("permissions") or (),
            email=actor_data.get("email"),
            real_name=actor_data.get("real_name"),
            ip_address=actor_data.get("ip_address"),
        )
        return cls.create(
            actor=actor,
            action_kind=data.get("action_kind", ActionKind.DEFAULT),
            rendered_text=str(data.get("rendered_text", "")),
            structured_fields=data.get("structured_fields"),
            explicit_destination=data.get("explicit_destination"),
            is_experimental=bool(data.get("is_experimental", False)),
            page_title=data.get("page_title"),
        )
