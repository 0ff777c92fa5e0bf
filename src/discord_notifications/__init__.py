"""Discord notifications for wiki events: suppression, formatting, routing and webhook delivery."""

from discord_notifications.config import get_settings
from discord_notifications.DI import Container
from discord_notifications.engine import DispatchEngine
from discord_notifications.models import ActionKind, Actor, NotificationEvent

__version__ = "0.0.1"
__all__ = [
    "ActionKind",
    "Actor",
    "Container",
    "DispatchEngine",
    "NotificationEvent",
    "get_settings",
]
