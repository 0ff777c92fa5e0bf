# -*- coding: utf-8 -*-
"""Actor: the identity that performed the action being notified."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

NamesInput = Union[str, Iterable[str], None]


def _names(value: NamesInput) -> frozenset[str]:
    """Normalise group/permission input; a bare string is one name, not its characters."""
    if not value:
        return frozenset()
    if isinstance(value, str):
        return frozenset((value,))
    return frozenset(v for v in value if isinstance(v, str) and v)


@dataclass(frozen=True, slots=True)
class Actor:
    """Who performed the action, with group and permission membership.

    Optional identity details (email, real name, IP) are supplied by the
    identity lookup as plain optionals; None means unavailable.
    """

    name: str
    is_registered: bool = True
    groups: frozenset[str] = frozenset()
    permissions: frozenset[str] = frozenset()
    email: Optional[str] = None
    real_name: Optional[str] = None
    ip_address: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        *,
        is_registered: bool = True,
        groups: NamesInput = (),
        permissions: NamesInput = (),
        email: Optional[str] = None,
        real_name: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Actor:
        """Create an Actor from a name or any iterable of group and permission names."""
        return cls(
            name=name,
            is_registered=is_registered,
            groups=_names(groups),
            permissions=_names(permissions),
            email=email or None,
            real_name=real_name or None,
            ip_address=ip_address or None,
        )

    @classmethod
    def anonymous(cls, name: str = "") -> Actor:
        """Unregistered actor with no groups or permissions (system or logged-out)."""
        return cls(name=name, is_registered=False)
