# -*- coding: utf-8 -*-
"""Async webhook client: single JSON POST, lenient response parsing."""

from __future__ import annotations

import asyncio
import json
import math
import aiohttp
import structlog
from dataclasses import dataclass
from typing import Any, Callable, Optional

from discord_notifications.config import Settings, get_settings
from discord_notifications.exceptions import WebhookTransportError
from discord_notifications.utils import mask_webhook_url

SUCCESS_STATUSES = frozenset({200, 204})
"""Statuses meaning "accepted" and "accepted, no content"."""

JSON_HEADERS = {"Content-Type": "application/json"}


def parse_retry_after(body: Any) -> Optional[float]:
    """Return retry_after (seconds) from a JSON object body, or None.

    Only a finite, non-negative number counts; booleans and strings do not.
    """
    if not isinstance(body, dict):
        return None
    value = body.get("retry_after")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class WebhookResponse:
    """Status and parsed body of one webhook POST."""

    status: int
    body: Any = None
    """Parsed JSON body, or None when empty or not JSON."""
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status in SUCCESS_STATUSES

    @property
    def retry_after(self) -> Optional[float]:
        return parse_retry_after(self.body)


class AsyncWebhookClient:
    """Async HTTP client for webhook destinations.

    Reads timeout and proxy from the settings provider on every request.
    Optionally takes an aiohttp.ClientSession; if none is provided one is
    created lazily and must be closed via aclose() or by using the client
    as an async context manager.
    """

    def __init__(
        self,
        settings_provider: Callable[[], Settings] = get_settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings_provider: Returns the current Settings (timeout, proxy).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings_provider = settings_provider
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncWebhookClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def post_json(self, url: str, body: bytes) -> WebhookResponse:
        """POST pre-serialized JSON bytes and return the response.

        Args:
            url: Webhook URL.
            body: JSON payload, already encoded.

        Returns:
            WebhookResponse with status and parsed body (any status, no raise).

        Raises:
            WebhookTransportError: On connection errors and timeouts.
        """
        settings = self._settings_provider()
        timeout_seconds = settings.delivery.timeout_seconds
        timeout = aiohttp.ClientTimeout(total=timeout_seconds, connect=timeout_seconds)
        proxy = settings.discord.proxy or None

        try:
            session = await self._get_session()
            async with session.post(
                url,
                data=body,
                headers=JSON_HEADERS,
                proxy=proxy,
                timeout=timeout,
            ) as response:
                raw = await response.read()
                text = raw.decode("utf-8", errors="replace")
                return WebhookResponse(
                    status=response.status,
                    body=self._parse_body(text),
                    text=text,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._logger.debug(
                "webhook_post_transport_error",
                webhook_url=mask_webhook_url(url),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise WebhookTransportError(
                f"POST failed: {type(e).__name__}",
                url=url,
                cause=e,
            ) from e

    @staticmethod
    def _parse_body(text: str) -> Any:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return None
