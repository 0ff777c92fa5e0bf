# -*- coding: utf-8 -*-
"""Unit tests for ExclusionPolicy parsing."""

from __future__ import annotations

from discord_notifications.models.action_kind import ActionKind
from discord_notifications.policy.exclusion_policy import ExclusionPolicy, ExclusionRules


def test_from_mapping_full_shape() -> None:
    policy = ExclusionPolicy.from_mapping(
        {
            "global": {"groups": ["bot"], "users": ["Spammer"]},
            "scoped": {"article_saved": {"permissions": ["autopatrol"]}},
            "experimental": {
                "global": {"groups": ["sysop"]},
                "scoped": {"new_user_account": {"users": ["Alice"]}},
            },
        }
    )

    assert policy.global_rules.groups == frozenset({"bot"})
    assert policy.global_rules.users == frozenset({"Spammer"})
    assert policy.rules_for(ActionKind.ARTICLE_SAVED) == ExclusionRules(
        permissions=frozenset({"autopatrol"})
    )
    assert policy.rules_for("article_deleted") is None
    assert policy.experimental.global_rules.groups == frozenset({"sysop"})
    rules = policy.experimental.rules_for(ActionKind.NEW_USER_ACCOUNT)
    assert rules is not None and rules.users == frozenset({"Alice"})


def test_action_kinds_accepted_at_top_level() -> None:
    policy = ExclusionPolicy.from_mapping(
        {
            "article_deleted": {"groups": ["bot"]},
            "experimental": {"new_user_account": {"groups": ["bot"]}},
        }
    )

    assert policy.rules_for("article_deleted").groups == frozenset({"bot"})  # type: ignore[union-attr]
    assert policy.experimental.rules_for("new_user_account").groups == frozenset({"bot"})  # type: ignore[union-attr]


def test_missing_keys_mean_no_restriction() -> None:
    policy = ExclusionPolicy.from_mapping({})

    assert policy.global_rules.is_empty
    assert policy.scoped == {}
    assert policy.experimental.global_rules.is_empty


def test_malformed_values_are_treated_as_no_restriction() -> None:
    policy = ExclusionPolicy.from_mapping(
        {
            "global": {"groups": "bot", "permissions": ["autopatrol", 7, None]},
            "scoped": ["not", "a", "mapping"],
            "experimental": "yes",
        }
    )

    assert policy.global_rules.groups == frozenset()
    assert policy.global_rules.permissions == frozenset({"autopatrol"})
    assert policy.scoped == {}
    assert policy.experimental.global_rules.is_empty


def test_non_mapping_policy_is_empty() -> None:
    assert ExclusionPolicy.from_mapping(None) == ExclusionPolicy()
    assert ExclusionPolicy.from_mapping(["bot"]) == ExclusionPolicy()
