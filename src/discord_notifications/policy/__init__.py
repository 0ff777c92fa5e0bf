"""Exclusion policy and suppression logic."""

from discord_notifications.policy.condition_evaluator import (
    ConditionEvaluator,
    SuppressionVerdict,
)
from discord_notifications.policy.exclusion_policy import (
    ExclusionPolicy,
    ExclusionRules,
    ExperimentalExclusionPolicy,
)
from discord_notifications.policy.title_filter import TitleFilter, regex_from_list

__all__ = [
    "ConditionEvaluator",
    "ExclusionPolicy",
    "ExclusionRules",
    "ExperimentalExclusionPolicy",
    "SuppressionVerdict",
    "TitleFilter",
    "regex_from_list",
]
