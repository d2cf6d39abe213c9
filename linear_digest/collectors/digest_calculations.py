#!/usr/bin/env python3
"""
Digest Calculation Functions

Pure calculation functions over the fetched issue list. They never fail:
missing optional fields fall back to the documented sentinels
("Unassigned", "No project") through Issue.assignee_label / Issue.project_label.
"""

from collections.abc import Sequence
from datetime import datetime

from linear_digest.domain.constants import digest_settings
from linear_digest.domain.digest import AssigneeStats, DigestStats
from linear_digest.domain.issue import Issue
from linear_digest.utils.datetime_utils import ensure_utc, window_start


def split_open_completed(issues: Sequence[Issue]) -> tuple[list[Issue], list[Issue]]:
    """Partition issues into (open, completed), keeping fetch order."""
    open_issues = [issue for issue in issues if issue.is_open]
    completed = [issue for issue in issues if not issue.is_open]
    return open_issues, completed


def find_overdue(open_issues: Sequence[Issue], now: datetime) -> list[Issue]:
    """Open issues whose due date is strictly before `now`, in fetch order."""
    return [issue for issue in open_issues if issue.is_overdue(now)]


def find_completed_since(
    completed: Sequence[Issue],
    now: datetime,
    window_days: int = digest_settings.COMPLETED_WINDOW_DAYS,
) -> list[Issue]:
    """
    Completed issues with completed_at >= now - window_days.

    The lower bound is inclusive: an issue completed exactly `window_days` ago counts.
    """
    since = window_start(now, window_days)
    return [issue for issue in completed if issue.completed_at is not None and issue.completed_at >= since]


def group_by_assignee(open_issues: Sequence[Issue], now: datetime) -> dict[str, AssigneeStats]:
    """
    Count open and overdue issues per assignee label.

    Returns:
        Assignee label -> AssigneeStats, in first-seen order
    """
    counts: dict[str, list[int]] = {}
    for issue in open_issues:
        bucket = counts.setdefault(issue.assignee_label, [0, 0])
        bucket[0] += 1
        if issue.is_overdue(now):
            bucket[1] += 1

    return {name: AssigneeStats(open=open_count, overdue=overdue) for name, (open_count, overdue) in counts.items()}


def group_by_project(open_issues: Sequence[Issue]) -> dict[str, int]:
    """
    Count open issues per project label.

    Returns:
        Project label -> open count, in first-seen order
    """
    counts: dict[str, int] = {}
    for issue in open_issues:
        counts[issue.project_label] = counts.get(issue.project_label, 0) + 1
    return counts


def compute_stats(issues: Sequence[Issue], now: datetime) -> DigestStats:
    """
    Aggregate the issue list into the digest summary.

    `now` is the single evaluation instant for the whole run; every due-date and
    completion comparison uses it. A naive `now` is taken as UTC.

    Args:
        issues: Issues in fetch order
        now: Evaluation instant (naive values are treated as UTC)

    Returns:
        DigestStats for the run

    Example:
        stats = compute_stats(issues, utc_now())
        print(f"{stats.open_count} open, {stats.overdue_count} overdue")
    """
    now = ensure_utc(now)
    open_issues, completed = split_open_completed(issues)
    overdue = find_overdue(open_issues, now)

    return DigestStats(
        evaluated_at=now,
        open_count=len(open_issues),
        overdue_count=len(overdue),
        completed_this_week=tuple(find_completed_since(completed, now)),
        by_assignee=group_by_assignee(open_issues, now),
        by_project=group_by_project(open_issues),
        overdue=tuple(overdue),
        open_issues=tuple(open_issues),
    )
