"""Delivery events (emitted by DeliveryClient)."""

from __future__ import annotations

from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]


class DeliveryFailedEvent(BaseEvent[None]):
    """Emitted when a destination is abandoned after a failed attempt sequence.

    Handled by DeliveryFailureAlerter to notify the operators.
    """

    url: str
    outcome: Literal["rate_limited", "http_error", "transport_error"]
    status_code: int | None = None
    attempts: int
    """Number of POST attempts made to this destination."""
    error_message: str | None = None
    action_kind: str
    is_experimental: bool = False
