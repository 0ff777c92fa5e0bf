# -*- coding: utf-8 -*-
"""EndpointResolver: computes the destination webhooks for one notification.

Configuration is read from the settings snapshot passed in on every call, so
mirror and category changes are visible on the next notification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord_notifications.models.destination import DestinationSet

if TYPE_CHECKING:
    from discord_notifications.config.config import Settings
    from discord_notifications.models.event import NotificationEvent


class EndpointResolver:
    """Resolves explicit overrides, category steering, experimental feed and mirrors."""

    def resolve(self, event: "NotificationEvent", settings: "Settings") -> DestinationSet:
        """Return the DestinationSet for event.

        Rules (first match wins):
        1. explicit_destination: that URL only, never mirrors.
        2. experimental event: experimental feed URLs, plus primary and
           mirrors only when echo_to_default_feed is enabled.
        3. dedicated webhook for the action kind: that URL only.
        4. primary webhook plus every mirror.
        """
        if event.explicit_destination:
            return DestinationSet.of([event.explicit_destination], "explicit")

        discord = settings.discord

        if event.is_experimental:
            experimental = settings.experimental
            urls = list(experimental.webhook_urls)
            if experimental.echo_to_default_feed:
                urls.append(discord.webhook_url)
                urls.extend(discord.additional_webhook_urls)
            return DestinationSet.of(urls, "experimental")

        category_url = discord.action_webhook_urls.get(event.action_kind.value)
        if category_url:
            return DestinationSet.of([category_url], "category")

        return DestinationSet.of(
            [discord.webhook_url, *discord.additional_webhook_urls],
            "default",
        )
