# -*- coding: utf-8 -*-
"""Action kinds and their embed colours.

Every kind maps to exactly one colour; anything outside the table (unknown or
future kinds) gets DEFAULT_COLOR.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ActionKind(str, Enum):
    """Category of a platform event, used for colour coding and policy scoping."""

    ARTICLE_SAVED = "article_saved"
    ARTICLE_INSERTED = "article_inserted"
    ARTICLE_DELETED = "article_deleted"
    ARTICLE_MOVED = "article_moved"
    ARTICLE_PROTECTED = "article_protected"
    NEW_USER_ACCOUNT = "new_user_account"
    FILE_UPLOADED = "file_uploaded"
    USER_BLOCKED = "user_blocked"
    USER_GROUPS_CHANGED = "user_groups_changed"
    FLOW = "flow"
    IMPORT_COMPLETE = "import_complete"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: Any) -> ActionKind:
        """Return the matching kind, or DEFAULT for anything unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DEFAULT


DEFAULT_COLOR = 11777212

_GREEN = 2993970
_BLUE = 3580392
_RED = 15217973
_ORANGE = 14038504
_TEAL = 3493864

ACTION_COLORS: Mapping[ActionKind, int] = MappingProxyType(
    {
        ActionKind.ARTICLE_SAVED: _GREEN,
        ActionKind.FLOW: _GREEN,
        ActionKind.IMPORT_COMPLETE: _GREEN,
        ActionKind.USER_GROUPS_CHANGED: _GREEN,
        ActionKind.ARTICLE_INSERTED: _BLUE,
        ActionKind.FILE_UPLOADED: _BLUE,
        ActionKind.NEW_USER_ACCOUNT: _BLUE,
        ActionKind.ARTICLE_DELETED: _RED,
        ActionKind.USER_BLOCKED: _RED,
        ActionKind.ARTICLE_MOVED: _ORANGE,
        ActionKind.ARTICLE_PROTECTED: _TEAL,
        ActionKind.DEFAULT: DEFAULT_COLOR,
    }
)


def color_for(action_kind: Any) -> int:
    """Return the embed colour for an action kind (total: unknown -> DEFAULT_COLOR)."""
    if isinstance(action_kind, ActionKind):
        return ACTION_COLORS.get(action_kind, DEFAULT_COLOR)
    if isinstance(action_kind, str):
        return ACTION_COLORS.get(ActionKind.parse(action_kind), DEFAULT_COLOR)
    return DEFAULT_COLOR
