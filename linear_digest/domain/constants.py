#!/usr/bin/env python3
"""
Application Constants

Centralized configuration constants for the Linear API client and the digest.
Provides type-safe, immutable configuration values used across collectors and publishers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinearAPIConfig:
    """
    Linear GraphQL API constants.

    Attributes:
        GRAPHQL_URL: Default Linear GraphQL endpoint
        PAGE_SIZE: Issues requested per page (200 items per page)
        MAX_PAGES: Maximum pages to fetch before aborting (safety limit: 500 pages)
        TIMEOUT_SECONDS: Timeout for a single page request (30 seconds)

    Example:
        >>> config = linear_api
        >>> print(config.PAGE_SIZE)
        200
    """

    GRAPHQL_URL: str = "https://api.linear.app/graphql"
    """Default Linear GraphQL endpoint"""

    PAGE_SIZE: int = 200
    """Issues requested per page"""

    MAX_PAGES: int = 500
    """Maximum pages to fetch from Linear API (safety limit)"""

    TIMEOUT_SECONDS: int = 30
    """Timeout for Linear API calls"""


@dataclass(frozen=True)
class DigestSettings:
    """
    Digest aggregation and rendering constants.

    Attributes:
        TITLE: Heading used by the chat embed and the email document
        EMAIL_SUBJECT: Subject line of the digest email
        UNASSIGNED_LABEL: Bucket for open issues without an assignee
        NO_PROJECT_LABEL: Bucket for open issues without a project
        COMPLETED_WINDOW_DAYS: Trailing window for "completed this week" (7 days)
        CHAT_OVERDUE_LIMIT: Overdue issues listed in the chat message (10)
        EMAIL_OVERDUE_LIMIT: Overdue issues listed in the email (15)
        DISCORD_DESCRIPTION_LIMIT: Discord embed description limit (4096 chars)
        SMTP_DEFAULT_PORT: SMTP submission port used when SMTP_PORT is unset (587)
        SMTP_TIMEOUT_SECONDS: Timeout for the SMTP session (30 seconds)
    """

    TITLE: str = "📊 Linear Friday Digest"
    EMAIL_SUBJECT: str = "Linear Friday Digest"

    UNASSIGNED_LABEL: str = "Unassigned"
    NO_PROJECT_LABEL: str = "No project"

    COMPLETED_WINDOW_DAYS: int = 7

    CHAT_OVERDUE_LIMIT: int = 10
    EMAIL_OVERDUE_LIMIT: int = 15

    DISCORD_DESCRIPTION_LIMIT: int = 4096

    SMTP_DEFAULT_PORT: int = 587
    SMTP_TIMEOUT_SECONDS: int = 30


# Singleton instances for easy import
linear_api = LinearAPIConfig()
digest_settings = DigestSettings()
