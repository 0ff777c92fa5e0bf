# -*- coding: utf-8 -*-
"""DestinationSet: the resolved webhook URLs for one notification."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Literal

DestinationReason = Literal["explicit", "category", "experimental", "default", "none"]


@dataclass(frozen=True, slots=True)
class DestinationSet:
    """Ordered, de-duplicated webhook URLs computed once per notification."""

    urls: tuple[str, ...]
    reason: DestinationReason = "default"

    @classmethod
    def of(cls, urls: Iterable[str | None], reason: DestinationReason) -> DestinationSet:
        """Build a set keeping first occurrences and dropping blank entries."""
        seen: list[str] = []
        for url in urls:
            if not url:
                continue
            cleaned = url.strip()
            if cleaned and cleaned not in seen:
                seen.append(cleaned)
        return cls(urls=tuple(seen), reason=reason if seen else "none")

    @classmethod
    def empty(cls) -> DestinationSet:
        return cls(urls=(), reason="none")

    @property
    def is_empty(self) -> bool:
        return not self.urls

    def __iter__(self) -> Iterator[str]:
        return iter(self.urls)

    def __len__(self) -> int:
        return len(self.urls)
