# -*- coding: utf-8 -*-
"""Exclusion policy: layered rules deciding whose notifications are suppressed.

Accepted shape (JSON env value or mapping)::

    {
        "global": {"groups": [...], "permissions": [...], "users": [...]},
        "scoped": {"article_saved": {"permissions": ["autopatrol"]}},
        "experimental": {
            "global": {...},
            "scoped": {"new_user_account": {...}},
        },
    }

Action kinds may also appear directly at the top level of the policy (or of
the experimental sub-tree) instead of under "scoped". A missing key at any
level means no restriction. Malformed values are logged and treated as no
restriction; parsing never fails on shape errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from discord_notifications.models.action_kind import ActionKind

_logger = structlog.get_logger("ExclusionPolicy")

_RULE_KEYS = ("groups", "permissions", "users")
_ACTION_KEYS = frozenset(kind.value for kind in ActionKind)


def _coerce_names(value: Any, key: str) -> frozenset[str]:
    """Return the string members of a list-like value; anything else is no restriction."""
    if value is None:
        return frozenset()
    if not isinstance(value, (list, tuple, set, frozenset)):
        _logger.warning(
            "exclusion_rule_not_a_list",
            rule_key=key,
            value_type=type(value).__name__,
        )
        return frozenset()
    names = [item for item in value if isinstance(item, str) and item]
    if len(names) != len(value):
        _logger.warning(
            "exclusion_rule_entries_dropped",
            rule_key=key,
            dropped=len(value) - len(names),
        )
    return frozenset(names)


def _coerce_scoped(data: Mapping[str, Any], section: str) -> dict[str, Any]:
    """Collect per-action rules from "scoped" and from top-level action keys."""
    scoped: dict[str, Any] = {}
    raw_scoped = data.get("scoped")
    if raw_scoped is not None:
        if isinstance(raw_scoped, Mapping):
            scoped.update({str(k): v for k, v in raw_scoped.items()})
        else:
            _logger.warning(
                "exclusion_scoped_not_a_mapping",
                section=section,
                value_type=type(raw_scoped).__name__,
            )
    for key, value in data.items():
        if key in _ACTION_KEYS and key not in scoped:
            scoped[key] = value
    return scoped


class ExclusionRules(BaseModel):
    """One layer of rules: suppress when any group, permission or user name matches."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    groups: frozenset[str] = frozenset()
    permissions: frozenset[str] = frozenset()
    users: frozenset[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _coerce_malformed(cls, data: Any) -> Any:
        if isinstance(data, ExclusionRules):
            return data
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            _logger.warning("exclusion_rules_not_a_mapping", value_type=type(data).__name__)
            return {}
        return {key: _coerce_names(data.get(key), key) for key in _RULE_KEYS}

    @property
    def is_empty(self) -> bool:
        return not (self.groups or self.permissions or self.users)


class ExperimentalExclusionPolicy(BaseModel):
    """Rules consulted only for events offered to the experimental (CVT) feed."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    global_rules: ExclusionRules = Field(default_factory=ExclusionRules, alias="global")
    scoped: dict[str, ExclusionRules] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _coerce_malformed(cls, data: Any) -> Any:
        if isinstance(data, ExperimentalExclusionPolicy):
            return data
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            _logger.warning(
                "exclusion_experimental_not_a_mapping",
                value_type=type(data).__name__,
            )
            return {}
        return {
            "global": data.get("global", data.get("global_rules")),
            "scoped": _coerce_scoped(data, "experimental"),
        }

    def rules_for(self, action_kind: ActionKind | str) -> Optional[ExclusionRules]:
        return self.scoped.get(_action_key(action_kind))


class ExclusionPolicy(BaseModel):
    """Global rules, per-action rules and the experimental sub-tree."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    global_rules: ExclusionRules = Field(default_factory=ExclusionRules, alias="global")
    scoped: dict[str, ExclusionRules] = Field(default_factory=dict)
    experimental: ExperimentalExclusionPolicy = Field(
        default_factory=ExperimentalExclusionPolicy
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_malformed(cls, data: Any) -> Any:
        if isinstance(data, ExclusionPolicy):
            return data
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            _logger.warning("exclusion_policy_not_a_mapping", value_type=type(data).__name__)
            return {}
        return {
            "global": data.get("global", data.get("global_rules")),
            "scoped": _coerce_scoped(data, "standard"),
            "experimental": data.get("experimental"),
        }

    @classmethod
    def from_mapping(cls, data: Any) -> ExclusionPolicy:
        """Build a policy from any (possibly malformed) mapping."""
        return cls.model_validate(data)

    def rules_for(self, action_kind: ActionKind | str) -> Optional[ExclusionRules]:
        return self.scoped.get(_action_key(action_kind))


def _action_key(action_kind: ActionKind | str) -> str:
    if isinstance(action_kind, ActionKind):
        return action_kind.value
    return str(action_kind)
