# -*- coding: utf-8 -*-
"""Unit tests for MessageBuilder and body normalisation."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from discord_notifications.models.event import NotificationEvent
from discord_notifications.models.message import OutboundMessage
from discord_notifications.notifications.builder import (
    DEFAULT_EXPERIMENTAL_FOOTER,
    MessageBuilder,
    StyleConfig,
)
from discord_notifications.notifications.text import normalize_body, rewrite_links


def _style(**overrides: Any) -> StyleConfig:
    values: dict[str, Any] = {
        "sitename": "Example Wiki",
        "footer_text": "Standard footer",
        "experimental_footer_text": "Experimental footer",
    }
    values.update(overrides)
    return StyleConfig(**values)


def test_build_basic_message(event_factory: Callable[..., NotificationEvent]) -> None:
    message = MessageBuilder().build(event_factory(), _style())

    assert message.color == 2993970
    assert message.display_name == "Example Wiki"
    assert message.body_text == "Alice saved [Main Page](https://wiki.example/Main_Page)"
    assert [(f.name, f.value) for f in message.fields] == [("Summary", "typo fix")]
    assert message.footer_text == "Standard footer"
    assert message.avatar_url is None


def test_from_name_overrides_sitename(event_factory: Callable[..., NotificationEvent]) -> None:
    message = MessageBuilder().build(
        event_factory(),
        _style(from_name="RC Bot", avatar_url="https://wiki.example/a.png"),
    )

    assert message.display_name == "RC Bot"
    assert message.avatar_url == "https://wiki.example/a.png"


def test_empty_field_values_are_dropped(event_factory: Callable[..., NotificationEvent]) -> None:
    event = event_factory(
        structured_fields=[("Empty", ""), ("Kept", "x"), ("None", None), ("Zero", 0), ("Size", 12)]
    )

    message = MessageBuilder().build(event, _style())

    assert [(f.name, f.value) for f in message.fields] == [("Kept", "x"), ("Size", "12")]


def test_line_breaks_removed_after_link_rewrite(
    event_factory: Callable[..., NotificationEvent],
) -> None:
    event = event_factory(rendered_text="Line one\r\nsee <https://w.example/P|P>\nend")

    message = MessageBuilder().build(event, _style())

    assert message.body_text == "Line onesee [P](https://w.example/P)end"
    assert "\n" not in message.body_text and "\r" not in message.body_text


def test_rewrite_links_handles_several_links() -> None:
    text = "<https://a.example|A> and <http://b.example/x?y=1|B c>"

    assert rewrite_links(text) == "[A](https://a.example) and [B c](http://b.example/x?y=1)"
    assert rewrite_links("<mailto:x|y>") == "<mailto:x|y>"


def test_normalize_body_is_idempotent() -> None:
    once = normalize_body("a <https://x.example|X>\nb")

    assert normalize_body(once) == once


def test_quotes_survive_serialization(event_factory: Callable[..., NotificationEvent]) -> None:
    event = event_factory(rendered_text='Alice wrote "hello"', structured_fields={"Summary": 'say "hi"'})

    message = MessageBuilder().build(event, _style())
    decoded = json.loads(message.to_json())

    assert decoded["embeds"][0]["description"] == 'Alice wrote "hello"'
    assert decoded["embeds"][0]["fields"][0]["value"] == 'say "hi"'
    assert OutboundMessage.from_payload(decoded) == message


def test_build_is_deterministic(event_factory: Callable[..., NotificationEvent]) -> None:
    builder = MessageBuilder()
    event = event_factory()

    assert builder.build(event, _style()).to_json() == builder.build(event, _style()).to_json()


def test_disable_footer_only_affects_standard_feed(
    event_factory: Callable[..., NotificationEvent],
) -> None:
    builder = MessageBuilder()
    style = _style(disable_footer=True)

    assert builder.build(event_factory(), style).footer_text is None
    assert builder.build(event_factory(is_experimental=True), style).footer_text == "Experimental footer"


def test_experimental_footer_is_mandatory(event_factory: Callable[..., NotificationEvent]) -> None:
    style = _style(footer_text="", experimental_footer_text="")

    message = MessageBuilder().build(event_factory(is_experimental=True), style)

    assert message.footer_text == DEFAULT_EXPERIMENTAL_FOOTER


def test_unknown_action_gets_default_color(event_factory: Callable[..., NotificationEvent]) -> None:
    message = MessageBuilder().build(event_factory(action_kind="page_translated"), _style())

    assert message.color == 11777212


def test_style_from_settings(settings_factory: Any) -> None:
    settings = settings_factory(
        discord={"sitename": "Fandom", "from_name": "", "disable_footer": True},
        experimental={"footer_text": "CVT contact"},
    )

    style = StyleConfig.from_settings(settings)

    assert style.display_name == "Fandom"
    assert style.disable_footer is True
    assert style.experimental_footer_text == "CVT contact"
