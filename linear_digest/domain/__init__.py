"""
Domain Models - Type-safe data structures for the digest

This package contains dataclasses representing business domain concepts:
    - issue: Issue, WorkflowState
    - digest: DigestStats, AssigneeStats

Usage:
    from linear_digest.domain.issue import Issue

    if issue.is_overdue(now):
        print(f"{issue.identifier} is overdue ({issue.assignee_label})")
"""

from .digest import AssigneeStats, DigestStats
from .issue import Issue, WorkflowState

__all__ = [
    "Issue",
    "WorkflowState",
    "AssigneeStats",
    "DigestStats",
]
