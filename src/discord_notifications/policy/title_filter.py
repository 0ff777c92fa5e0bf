# -*- coding: utf-8 -*-
"""Page title exclusions: prefixes and regular expressions from configuration.

Invalid patterns are dropped with a warning naming the configuration key, so a
typo in one pattern does not disable the others.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Callable, Optional

import structlog


def _is_valid_regex(pattern: str) -> bool:
    try:
        re.compile(pattern)
    except re.error:
        return False
    return True


def regex_from_list(
    patterns: Iterable[str],
    start: str = "",
    end: str = "",
    name: str = "",
    *,
    get_logger: Callable[[str], Any] = structlog.get_logger,
) -> Optional[re.Pattern[str]]:
    """Combine patterns into one alternation, skipping invalid ones.

    Args:
        patterns: Regular expressions to join with "|".
        start: Prepended to every pattern check and to the combined pattern.
        end: Appended to every pattern check and to the combined pattern.
        name: Configuration key reported in warnings (no warning when empty).

    Returns:
        Compiled pattern, or None when nothing valid remains.
    """
    logger = get_logger("TitleFilter")
    valid: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern:
            continue
        if _is_valid_regex(start + pattern + end):
            valid.append(pattern)
        elif name:
            logger.warning("title_filter_invalid_regex", config_key=name, regex=pattern)

    if not valid:
        return None

    combined = start + "|".join(valid) + end
    if not _is_valid_regex(combined):
        if name:
            logger.warning("title_filter_invalid_regex", config_key=name, regex=combined)
        return None
    return re.compile(combined)


class TitleFilter:
    """Decides whether notifications about a page title are skipped."""

    def __init__(
        self,
        prefixes: Iterable[str] = (),
        patterns: Iterable[str] = (),
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
    ) -> None:
        self._prefixes = tuple(p for p in prefixes if p)
        self._regex = regex_from_list(
            patterns,
            start="(?:",
            end=")",
            name="events.excluded_title_patterns",
            get_logger=get_logger,
        )

    @classmethod
    def from_settings(cls, settings: Any) -> TitleFilter:
        events = settings.events
        return cls(events.excluded_title_prefixes, events.excluded_title_patterns)

    def is_excluded(self, title: Optional[str]) -> bool:
        """Return True when title starts with an excluded prefix or matches an excluded pattern."""
        if not title:
            return False
        if any(title.startswith(prefix) for prefix in self._prefixes):
            return True
        return bool(self._regex and self._regex.search(title))
