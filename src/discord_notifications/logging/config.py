# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

Webhook URLs carry their secret token in the path, so every event passes
through a redaction processor before it is rendered or shipped.
"""

from __future__ import annotations

import logging
import re
import logfire
import structlog
from typing import Any, Optional
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from discord_notifications.config import Settings, get_settings
from discord_notifications.config.config import AppSettings, LoggingSettings
from discord_notifications.utils import mask_webhook_url

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Matches the /webhooks/<id>/<token> shape used by Discord-compatible endpoints.
_WEBHOOK_URL = re.compile(r"https?://[^\s\"'<>]+/webhooks/[^\s\"'<>]+")


def _redact_webhook_urls(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask webhook tokens in any string value (error messages may echo the request URL)."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "/webhooks/" in value:
            event_dict[key] = _WEBHOOK_URL.sub(lambda m: mask_webhook_url(m.group(0)), value)
    return event_dict


def _service_context(app_settings: AppSettings) -> Processor:
    """Build a processor attaching logger name and the service identity to every event."""

    def _add(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        event_dict["app_name"] = app_settings.app_name
        if app_settings.service_name:
            event_dict["service_name"] = app_settings.service_name
        if app_settings.service_version:
            event_dict["service_version"] = app_settings.service_version
        event_dict["environment"] = app_settings.environment
        return event_dict

    return _add


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _file_handler(logging_settings: LoggingSettings) -> logging.Handler:
    path = Path(logging_settings.log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return TimedRotatingFileHandler(
        path,
        when=logging_settings.log_file_when,
        interval=logging_settings.log_file_interval,
        backupCount=logging_settings.log_file_backup_count,
        encoding="utf-8",
        utc=logging_settings.log_file_utc,
    )


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    """Return the enabled stdlib handlers, each with its own level."""
    handlers: list[logging.Handler] = []
    if logging_settings.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(logging_settings.console_level))
        handlers.append(console)
    if logging_settings.log_to_file:
        file_handler = _file_handler(logging_settings)
        file_handler.setLevel(_level(logging_settings.file_level))
        handlers.append(file_handler)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _configure_logfire(settings: Settings) -> None:
    app_settings = settings.app
    logfire.configure(
        token=settings.logging.logfire_token,
        service_name=app_settings.service_name or app_settings.app_name,
        service_version=app_settings.service_version,
        min_level=LOG_LEVEL_TO_LOGFIRE.get(settings.logging.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app_settings.environment,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure stdlib handlers, structlog processors and (optionally) Logfire.

    The file handler always receives JSON; the console uses JSON only when
    logging.json_format is set and no file is written.
    """
    settings = settings or get_settings()
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(
            level=min(h.level for h in handlers),
            handlers=handlers,
            force=True,
        )

    if logging_settings.logfire_enabled:
        _configure_logfire(settings)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.app),
        _redact_webhook_urls,
    ]
    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        use_json = logging_settings.log_to_file or logging_settings.json_format
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer()
        )
        processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
