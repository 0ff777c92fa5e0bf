# -*- coding: utf-8 -*-
"""Unit tests for NotificationEvent and Actor construction."""

from __future__ import annotations

import pytest

from discord_notifications.models.action_kind import ActionKind
from discord_notifications.models.actor import Actor
from discord_notifications.models.event import NotificationEvent


def test_create_keeps_field_order_and_parses_kind() -> None:
    event = NotificationEvent.create(
        actor=Actor.create("Alice"),
        action_kind="file_uploaded",
        rendered_text="Alice uploaded a file",
        structured_fields={"Summary": "logo", "Size": 10, "Comment": ""},
    )

    assert event.action_kind is ActionKind.FILE_UPLOADED
    assert event.structured_fields == (("Summary", "logo"), ("Size", 10), ("Comment", ""))
    assert event.explicit_destination is None
    assert event.is_experimental is False


def test_create_blank_explicit_destination_is_none() -> None:
    event = NotificationEvent.create(
        actor=Actor.anonymous(),
        action_kind="unknown_kind",
        rendered_text="x",
        explicit_destination="   ",
    )

    assert event.explicit_destination is None
    assert event.action_kind is ActionKind.DEFAULT


def test_from_dict_reads_actor_and_optional_identity() -> None:
    event = NotificationEvent.from_dict(
        {
            "actor": {
                "name": "Bob",
                "groups": ["sysop", "bot"],
                "permissions": ["autopatrol"],
                "email": "",
                "ip_address": "203.0.113.7",
            },
            "action_kind": "user_blocked",
            "rendered_text": "Bob blocked Mallory",
            "structured_fields": [["Reason", "spam"]],
            "is_experimental": True,
            "page_title": "User:Mallory",
        }
    )

    assert event.actor.name == "Bob"
    assert event.actor.is_registered is True
    assert event.actor.groups == frozenset({"sysop", "bot"})
    assert event.actor.permissions == frozenset({"autopatrol"})
    assert event.actor.email is None
    assert event.actor.ip_address == "203.0.113.7"
    assert event.action_kind is ActionKind.USER_BLOCKED
    assert event.structured_fields == (("Reason", "spam"),)
    assert event.is_experimental is True
    assert event.page_title == "User:Mallory"


def test_anonymous_actor_has_no_memberships() -> None:
    actor = Actor.anonymous("203.0.113.7")

    assert actor.is_registered is False
    assert actor.groups == frozenset()
    assert actor.permissions == frozenset()


def test_single_string_group_is_one_name() -> None:
    actor = Actor.create("RoboEditor", groups="bot", permissions="autopatrol")

    assert actor.groups == frozenset({"bot"})
    assert actor.permissions == frozenset({"autopatrol"})


def test_from_dict_accepts_string_groups_and_field_objects() -> None:
    event = NotificationEvent.from_dict(
        {
            "actor": {"name": "RoboEditor", "groups": "bot"},
            "action_kind": "article_saved",
            "rendered_text": "RoboEditor saved Main Page",
            "structured_fields": [
                {"name": "Summary", "value": "typo fix"},
                {"name": "Size", "value": 12},
            ],
        }
    )

    assert event.actor.groups == frozenset({"bot"})
    assert event.structured_fields == (("Summary", "typo fix"), ("Size", 12))


@pytest.mark.parametrize(
    "fields",
    [
        [{"value": "no name"}],
        ["ab"],
        [("Summary", "typo", "extra")],
        [42],
    ],
)
def test_create_rejects_malformed_field_entries(fields: list[object]) -> None:
    with pytest.raises(ValueError):
        NotificationEvent.create(
            actor=Actor.create("Alice"),
            action_kind="article_saved",
            rendered_text="x",
            structured_fields=fields,
        )
