#!/usr/bin/env python3
"""
Datetime Utility Functions

Centralized datetime parsing for Linear API payloads.

Handles common patterns:
- Linear ISO timestamps with 'Z' suffix (createdAt, updatedAt, completedAt)
- Linear timeless dates (dueDate, "YYYY-MM-DD")
- The trailing window start used for "completed this week"
"""

from datetime import UTC, date, datetime, time, timedelta


def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC.

    Naive values are treated as UTC; aware values are converted.

    Examples:
        >>> ensure_utc(datetime(2026, 10, 16, 15, 0))
        datetime.datetime(2026, 10, 16, 15, 0, tzinfo=datetime.timezone.utc)
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_linear_timestamp(timestamp_str: str | None) -> datetime | None:
    """
    Parse a Linear ISO timestamp to a timezone-aware UTC datetime.

    Linear returns timestamps in ISO format with 'Z' suffix indicating UTC:
    Example: "2026-10-16T09:30:00.000Z"

    Args:
        timestamp_str: ISO timestamp string, or None

    Returns:
        datetime in UTC, or None if input is None or empty

    Raises:
        ValueError: If timestamp format is invalid or cannot be parsed

    Examples:
        >>> parse_linear_timestamp("2026-10-16T09:30:00.000Z")
        datetime.datetime(2026, 10, 16, 9, 30, tzinfo=datetime.timezone.utc)

        >>> parse_linear_timestamp(None)
        None
    """
    if not timestamp_str:
        return None

    if not isinstance(timestamp_str, str):
        raise ValueError(f"Timestamp must be a string, got {type(timestamp_str)}")

    try:
        parsed = datetime.fromisoformat(timestamp_str.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid timestamp format: {timestamp_str}") from e

    return ensure_utc(parsed)


def parse_linear_date(date_str: str | None) -> datetime | None:
    """
    Parse a Linear timeless date ("YYYY-MM-DD") to UTC midnight.

    Args:
        date_str: Date string, or None

    Returns:
        datetime at 00:00 UTC on that date, or None if input is None or empty

    Raises:
        ValueError: If the date format is invalid

    Examples:
        >>> parse_linear_date("2026-10-20")
        datetime.datetime(2026, 10, 20, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not date_str:
        return None

    if not isinstance(date_str, str):
        raise ValueError(f"Date must be a string, got {type(date_str)}")

    try:
        parsed = date.fromisoformat(date_str)
    except ValueError as e:
        raise ValueError(f"Invalid date format: {date_str}") from e

    return datetime.combine(parsed, time.min, tzinfo=UTC)


def window_start(now: datetime, days: int) -> datetime:
    """
    Start of the trailing window of `days` days ending at `now`.

    Uses a fixed 24h-per-day subtraction, not calendar arithmetic.

    Args:
        now: End of the window
        days: Window length in days

    Returns:
        now - days
    """
    return now - timedelta(days=days)


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(UTC)
