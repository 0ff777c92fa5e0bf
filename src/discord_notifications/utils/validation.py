"""Validation and masking helpers for webhook URLs."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit


def is_webhook_url(url: Any) -> bool:
    """Return True if url is an absolute http(s) URL with a host."""
    if not isinstance(url, str):
        return False
    parts = urlsplit(url.strip())
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def mask_webhook_url(url: str | None) -> str:
    """Return a webhook URL safe for logging (token replaced, e.g. https://host/api/webhooks/123/***)."""
    if not url:
        return "***"
    parts = urlsplit(url.strip())
    if not parts.netloc:
        return "***"
    segments = [s for s in parts.path.split("/") if s]
    if len(segments) > 1:
        segments[-1] = "***"
    elif segments:
        segments[-1] = segments[-1][:4] + "***"
    path = "/" + "/".join(segments) if segments else ""
    return f"{parts.scheme}://{parts.netloc}{path}"
