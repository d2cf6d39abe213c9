"""
Digest domain models - Weekly statistics summary

Holds the aggregated view of the issue list that both publishers render:
    - Open / overdue counts
    - Completed-this-week issues
    - Per-assignee and per-project breakdowns
    - The overdue list in fetch order
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

from .issue import Issue


@dataclass(frozen=True)
class AssigneeStats:
    """
    Open and overdue counts for one assignee bucket.

    Attributes:
        open: Open issues assigned to the bucket
        overdue: Open issues in the bucket that are past due
    """

    open: int = 0
    overdue: int = 0


@dataclass(frozen=True)
class DigestStats:
    """
    Statistics summary for one digest run.

    Built once by compute_stats() and read by every publisher; never mutated.

    Attributes:
        evaluated_at: Instant every due/completed comparison was made against
        open_count: Issues without a completion timestamp
        overdue_count: Open issues whose due date is before evaluated_at
        completed_this_week: Issues completed within the trailing window, fetch order
        by_assignee: Assignee label -> AssigneeStats (insertion order, read-only)
        by_project: Project label -> open count (insertion order, read-only)
        overdue: Overdue issues in fetch order (untruncated)
        open_issues: Open issues in fetch order

    Example:
        stats = compute_stats(issues, now)
        for name, counts in stats.assignees_sorted():
            print(f"{name}: {counts.open} open ({counts.overdue} overdue)")
    """

    evaluated_at: datetime
    open_count: int
    overdue_count: int
    completed_this_week: tuple[Issue, ...] = ()
    by_assignee: Mapping[str, AssigneeStats] = field(default_factory=dict)
    by_project: Mapping[str, int] = field(default_factory=dict)
    overdue: tuple[Issue, ...] = ()
    open_issues: tuple[Issue, ...] = ()

    def __post_init__(self):
        # Breakdowns are read-only copies of what the builder passed in
        object.__setattr__(self, "by_assignee", MappingProxyType(dict(self.by_assignee)))
        object.__setattr__(self, "by_project", MappingProxyType(dict(self.by_project)))

    @property
    def completed_count(self) -> int:
        return len(self.completed_this_week)

    def assignees_sorted(self) -> list[tuple[str, AssigneeStats]]:
        """Assignee buckets in lexicographic order of their labels."""
        return sorted(self.by_assignee.items(), key=lambda item: item[0])

    def projects_by_count(self) -> list[tuple[str, int]]:
        """
        Project buckets by descending open count.

        Ties keep the order in which the projects were first seen.
        """
        return sorted(self.by_project.items(), key=lambda item: -item[1])

    def top_overdue(self, limit: int) -> list[Issue]:
        """First `limit` overdue issues, in fetch order."""
        return list(self.overdue[:limit])

    def __str__(self) -> str:
        """String representation for logging/debugging"""
        return (
            f"DigestStats(open={self.open_count}, overdue={self.overdue_count}, "
            f"completed_this_week={self.completed_count})"
        )
