"""
Discord Webhook Publisher

Formats the digest as a single Discord embed and posts it to a webhook.

Payload shape:
    {"content": None, "embeds": [{"title": "📊 Linear Friday Digest", "description": "..."}]}

Usage:
    from linear_digest.publishers.discord import DiscordPublisher

    DiscordPublisher(config.discord).publish(stats)
"""

from typing import Any

import requests

from linear_digest.core import DiscordConfig, post
from linear_digest.domain.constants import digest_settings
from linear_digest.domain.digest import DigestStats
from linear_digest.utils.error_handling import log_and_raise

from .base import DeliveryError, DigestPublisher


def format_description(stats: DigestStats, overdue_limit: int = digest_settings.CHAT_OVERDUE_LIMIT) -> str:
    """
    Build the embed description (Discord markdown).

    Args:
        stats: Digest summary
        overdue_limit: Overdue issues to list

    Returns:
        Description text, at most DISCORD_DESCRIPTION_LIMIT characters
    """
    lines = [
        f"**Open:** {stats.open_count} • **Overdue:** {stats.overdue_count} "
        f"• **Completed (7d):** {stats.completed_count}",
        "",
        "**By assignee**",
    ]
    for name, counts in stats.assignees_sorted():
        lines.append(f"• {name}: {counts.open} open ({counts.overdue} overdue)")

    lines += ["", "**By project**"]
    for name, count in stats.projects_by_count():
        lines.append(f"• {name}: {count}")

    lines.append("")
    top_overdue = stats.top_overdue(overdue_limit)
    if top_overdue:
        lines.append("**Top overdue**")
        lines += [f"• [{issue.identifier}]({issue.url}) {issue.title}" for issue in top_overdue]

    return truncate("\n".join(lines), digest_settings.DISCORD_DESCRIPTION_LIMIT)


def truncate(text: str, limit: int) -> str:
    """Cut text to `limit` characters, ending with an ellipsis when shortened."""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def format_discord_payload(stats: DigestStats) -> dict[str, Any]:
    """
    Build the webhook JSON payload.

    Args:
        stats: Digest summary

    Returns:
        Webhook payload with one embed
    """
    return {
        "content": None,
        "embeds": [
            {
                "title": digest_settings.TITLE,
                "description": format_description(stats),
            }
        ],
    }


class DiscordPublisher(DigestPublisher):
    """Posts the digest embed to a Discord webhook"""

    name = "discord"

    def __init__(self, config: DiscordConfig | None):
        super().__init__()
        self.config = config

    @property
    def is_configured(self) -> bool:
        return self.config is not None

    def render(self, stats: DigestStats) -> dict[str, Any]:
        return format_discord_payload(stats)

    def deliver(self, payload: dict[str, Any]) -> None:
        """
        POST the payload to the webhook.

        Raises:
            DeliveryError: On transport errors or a non-2xx response
        """
        if self.config is None:
            raise DeliveryError(self.name, "no webhook URL configured")
        context = {"sink": self.name}

        try:
            response = post(self.config.webhook_url, json=payload)
        except requests.RequestException as e:
            log_and_raise(
                self.logger,
                DeliveryError(self.name, f"webhook unreachable: {e}"),
                context,
                "Discord delivery",
                cause=e,
            )

        if not 200 <= response.status_code < 300:
            log_and_raise(
                self.logger,
                DeliveryError(self.name, f"webhook returned HTTP {response.status_code}: {response.text[:200]}"),
                context,
                "Discord delivery",
            )
