# -*- coding: utf-8 -*-
"""Delivery bookkeeping: one attempt per POST, one result per destination."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeliveryOutcome(str, Enum):
    """Final state of the attempt sequence for one destination."""

    DELIVERED = "delivered"
    RATE_LIMITED = "rate_limited"
    """retry_after kept coming back until the retry cap was reached."""
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class DeliveryAttempt:
    """A single POST of the serialized message to one destination."""

    url: str
    attempt: int
    """1-based attempt counter for this destination."""
    status: Optional[int]
    """HTTP status, or None when no response was received."""
    retry_after: Optional[float] = None


@dataclass(frozen=True, slots=True)
class DeliveryResult:
    """Outcome of delivering one message to one destination."""

    url: str
    outcome: DeliveryOutcome
    attempts: tuple[DeliveryAttempt, ...] = ()
    error_message: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.outcome is DeliveryOutcome.DELIVERED

    @property
    def last_status(self) -> Optional[int]:
        return self.attempts[-1].status if self.attempts else None
