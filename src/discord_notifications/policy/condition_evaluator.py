# -*- coding: utf-8 -*-
"""ConditionEvaluator: pure logic deciding whether a notification is suppressed.

No I/O and no state; every input (actor, action kind, feed, policy) is passed in.
Runs before any formatting work.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from discord_notifications.models.action_kind import ActionKind

if TYPE_CHECKING:
    from discord_notifications.models.actor import Actor
    from discord_notifications.policy.exclusion_policy import (
        ExclusionPolicy,
        ExclusionRules,
    )


@dataclass(frozen=True)
class SuppressionVerdict:
    """Result of ConditionEvaluator evaluation (decision + reason for logging)."""

    suppressed: bool
    reason: str


_ALLOWED = SuppressionVerdict(suppressed=False, reason="no exclusion rule matched")


class ConditionEvaluator:
    """Evaluates the layered exclusion policy as a short-circuit OR.

    Order:
    1. global rules (always)
    2. experimental events: experimental global, then experimental[action_kind]
    3. standard events: scoped[action_kind]

    Within a layer, permissions, groups and user names are checked in that
    order; any single match suppresses.
    """

    def should_suppress(
        self,
        actor: "Actor",
        action_kind: ActionKind | str,
        is_experimental: bool,
        policy: "ExclusionPolicy",
    ) -> bool:
        """Return True when any applicable rule matches the actor."""
        return self.evaluate(actor, action_kind, is_experimental, policy).suppressed

    def evaluate(
        self,
        actor: "Actor",
        action_kind: ActionKind | str,
        is_experimental: bool,
        policy: "ExclusionPolicy",
    ) -> SuppressionVerdict:
        """Return SuppressionVerdict (decision + reason) for logging."""
        kind = ActionKind.parse(action_kind)

        layers: list[tuple[str, Optional["ExclusionRules"]]] = [
            ("global", policy.global_rules),
        ]
        if is_experimental:
            layers.append(("experimental.global", policy.experimental.global_rules))
            layers.append(
                (f"experimental.{kind.value}", policy.experimental.rules_for(kind))
            )
        else:
            layers.append((kind.value, policy.rules_for(kind)))

        for layer_name, rules in layers:
            if rules is None:
                continue
            match = self._match(actor, rules)
            if match:
                return SuppressionVerdict(
                    suppressed=True,
                    reason=f"{layer_name} {match}",
                )
        return _ALLOWED

    @staticmethod
    def _match(actor: "Actor", rules: "ExclusionRules") -> Optional[str]:
        """Return a description of the first matching rule, or None."""
        permissions = actor.permissions & rules.permissions
        if permissions:
            return f"permission matched ({', '.join(sorted(permissions))})"
        groups = actor.groups & rules.groups
        if groups:
            return f"group matched ({', '.join(sorted(groups))})"
        if actor.name and actor.name in rules.users:
            return f"user matched ({actor.name})"
        return None
