# -*- coding: utf-8 -*-
"""
Entry point: send one wiki event to the configured Discord webhooks.

Orchestrates: logging, settings, container, failure alerter, notify, shutdown.
The event is a JSON object (see NotificationEvent.from_dict) read from a file
or from stdin.

Run with: python -m discord_notifications.main event.json
          echo '{...}' | discord-notify -

Notebook usage:
    from discord_notifications.main import run
    await run({"actor": {"name": "Alice"}, "action_kind": "article_saved", ...})
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
import structlog
from collections.abc import Mapping
from typing import Any, Optional, Sequence

from discord_notifications.DI import Container
from discord_notifications.logging.config import configure_logging
from discord_notifications.models.event import NotificationEvent


def _read_event(source: str) -> dict[str, Any]:
    if source == "-":
        raw = sys.stdin.read()
    else:
        with open(source, encoding="utf-8") as fh:
            raw = fh.read()
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("event JSON must be an object")
    return data


async def run(event_data: Mapping[str, Any]) -> None:
    """Build the container, dispatch one event and shut down cleanly."""
    configure_logging()
    logger = structlog.get_logger("main")

    container = Container()
    webhook_client = container.webhook_client()
    event_bus = container.event_bus()
    alerter = container.failure_alerter()
    alerter.start()
    try:
        engine = container.dispatch_engine()
        event = NotificationEvent.from_dict(event_data)
        logger.info(
            "main_event_received",
            action_kind=event.action_kind.value,
            is_experimental=event.is_experimental,
        )
        await engine.notify(event)
        # Failure alerts run on the bus; let them finish before closing the session.
        await event_bus.wait_until_idle()
    finally:
        alerter.stop()
        await webhook_client.aclose()
        logger.info("main_shutdown_complete")


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="discord-notify",
        description="Send a wiki event notification to Discord webhooks.",
    )
    parser.add_argument(
        "event",
        nargs="?",
        default="-",
        help="Path to the event JSON file, or '-' for stdin (default).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    asyncio.run(run(_read_event(args.event)))


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
