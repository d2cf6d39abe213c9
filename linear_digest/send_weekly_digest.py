#!/usr/bin/env python3
"""
Weekly Linear Digest

Pulls every non-archived issue from Linear, aggregates it into the weekly
summary and sends it to Discord and/or email.

Usage:
    linear-digest                        # fetch, aggregate, deliver
    linear-digest --dry-run              # fetch and render only, nothing is sent
    linear-digest --save-html digest.html
    python -m linear_digest.send_weekly_digest --log-level DEBUG

Environment (.env supported):
    LINEAR_API_KEY (required), LINEAR_API_URL, LINEAR_MAX_PAGES,
    DISCORD_WEBHOOK_URL, SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASS,
    MAIL_FROM, MAIL_TO
"""

import argparse
import json
import sys
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from linear_digest.collectors.digest_calculations import compute_stats
from linear_digest.collectors.linear_graphql_client import FetchError, LinearGraphQLClient, get_linear_client
from linear_digest.core import ConfigurationError, DigestConfig, get_config, get_logger, log_with_context, setup_logging
from linear_digest.domain.digest import DigestStats
from linear_digest.publishers.base import DeliveryError, DigestPublisher
from linear_digest.publishers.discord import DiscordPublisher, format_discord_payload
from linear_digest.publishers.email_digest import EmailDigestPublisher, render_email_html
from linear_digest.utils.datetime_utils import utc_now

logger = get_logger(__name__)


def build_publishers(config: DigestConfig) -> list[DigestPublisher]:
    """Sinks in delivery order: Discord first, then email."""
    return [DiscordPublisher(config.discord), EmailDigestPublisher(config.email)]


def run_digest(
    config: DigestConfig,
    now: datetime | None = None,
    client: LinearGraphQLClient | None = None,
    publishers: Sequence[DigestPublisher] | None = None,
    dry_run: bool = False,
    save_html: Path | None = None,
) -> DigestStats:
    """
    Run one digest: fetch, aggregate, publish.

    Errors are not caught here; a failing publisher stops the run and the
    publishers after it are not attempted.

    Args:
        config: Validated configuration
        now: Evaluation instant (default: current UTC time, read once)
        client: Linear client (default: built from config.linear)
        publishers: Sinks in delivery order (default: Discord, then email)
        dry_run: Render and log the digest without delivering it
        save_html: Write the email HTML document to this path

    Returns:
        The computed DigestStats

    Raises:
        FetchError: If the issue list cannot be retrieved
        DeliveryError: If a configured sink fails
    """
    now = now or utc_now()
    client = client or get_linear_client(config.linear)
    publishers = build_publishers(config) if publishers is None else publishers

    issues = client.fetch_all_issues()
    stats = compute_stats(issues, now)
    log_with_context(
        logger,
        "info",
        f"Digest computed: {stats}",
        issue_count=len(issues),
        open_count=stats.open_count,
        overdue_count=stats.overdue_count,
        completed_this_week=stats.completed_count,
    )

    if save_html:
        save_html.parent.mkdir(parents=True, exist_ok=True)
        save_html.write_text(render_email_html(stats), encoding="utf-8")
        logger.info(f"Email HTML written to {save_html}")

    if dry_run:
        logger.info("Dry run, nothing will be delivered")
        logger.info("Discord payload:\n" + json.dumps(format_discord_payload(stats), indent=2, ensure_ascii=False))
        return stats

    for publisher in publishers:
        publisher.publish(stats)

    return stats


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Send the weekly Linear digest to Discord and/or email")

    parser.add_argument("--dry-run", action="store_true", help="Fetch and render the digest without sending it")
    parser.add_argument("--save-html", type=Path, help="Write the email HTML document to this file")
    parser.add_argument(
        "--max-pages", type=int, help="Page ceiling for Linear pagination (default: LINEAR_MAX_PAGES or 500)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines on the console")
    parser.add_argument("--log-file", type=Path, help="Also write JSON logs to this file")

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Main execution."""
    args = parse_arguments(argv)
    setup_logging(level=args.log_level, log_file=args.log_file, json_output=args.json_logs)

    try:
        config = get_config().get_digest_config(max_pages=args.max_pages)
        run_digest(config, dry_run=args.dry_run, save_html=args.save_html)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except (FetchError, DeliveryError) as e:
        logger.error(f"Digest failed: {e}")
        return 1

    print("Digest rendered." if args.dry_run else "Digest sent.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
