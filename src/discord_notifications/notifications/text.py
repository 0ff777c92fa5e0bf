# -*- coding: utf-8 -*-
"""Body text normalisation for webhook embeds."""

from __future__ import annotations

import re

# <http...|label>  ->  [label](http...)
_LINK_MARKUP = re.compile(r"<(http[^|]*)\|([^>]*)>")


def rewrite_links(text: str) -> str:
    """Rewrite <url|label> link markup into markdown [label](url)."""
    return _LINK_MARKUP.sub(r"[\2](\1)", text)


def strip_line_breaks(text: str) -> str:
    """Remove literal carriage returns and newlines."""
    return text.replace("\r", "").replace("\n", "")


def normalize_body(text: str) -> str:
    """Rewrite link markup, then remove line breaks."""
    return strip_line_breaks(rewrite_links(text))
