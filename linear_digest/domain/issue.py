"""
Issue domain models - Linear issues as retrieved from the GraphQL API

Represents a single tracked issue with its workflow state and the optional
ownership fields (assignee, project, team) used to bucket the digest.
"""

from dataclasses import dataclass
from datetime import datetime

from .constants import digest_settings


@dataclass(frozen=True)
class WorkflowState:
    """
    Workflow state of an issue.

    Attributes:
        name: Display name of the state ("In Progress", "Done", ...)
        type: Linear state category (backlog, unstarted, started, completed, canceled, triage)
    """

    name: str
    type: str


@dataclass(frozen=True)
class Issue:
    """
    Represents an issue retrieved from Linear.

    Attributes:
        id: Stable Linear issue ID (UUID)
        identifier: Human-readable short code (e.g. "ENG-123")
        title: Issue title
        url: Link to the issue in Linear
        created_at: Creation timestamp (UTC)
        updated_at: Last update timestamp (UTC)
        state: Current workflow state
        due_date: Due date as UTC midnight, or None
        completed_at: Completion timestamp (UTC), or None if still open
        assignee_name: Assignee display name, or None
        project_name: Project name, or None
        team_name: Team name, or None
        priority: Linear priority (0 = none, 1 = urgent ... 4 = low), or None

    Example:
        issue = Issue(
            id="2f1c...",
            identifier="ENG-42",
            title="Fix login redirect",
            url="https://linear.app/acme/issue/ENG-42",
            created_at=datetime(2026, 10, 1, tzinfo=UTC),
            updated_at=datetime(2026, 10, 2, tzinfo=UTC),
            state=WorkflowState(name="Todo", type="unstarted"),
        )

        if issue.is_open:
            print(f"{issue.identifier} belongs to {issue.assignee_label}")
    """

    id: str
    identifier: str
    title: str
    url: str
    created_at: datetime
    updated_at: datetime
    state: WorkflowState
    due_date: datetime | None = None
    completed_at: datetime | None = None
    assignee_name: str | None = None
    project_name: str | None = None
    team_name: str | None = None
    priority: int | None = None

    @property
    def is_open(self) -> bool:
        """True while the issue has no completion timestamp."""
        return self.completed_at is None

    @property
    def assignee_label(self) -> str:
        """Assignee name, or the "Unassigned" bucket when absent or empty."""
        return self.assignee_name or digest_settings.UNASSIGNED_LABEL

    @property
    def project_label(self) -> str:
        """Project name, or the "No project" bucket when absent or empty."""
        return self.project_name or digest_settings.NO_PROJECT_LABEL

    def is_overdue(self, now: datetime) -> bool:
        """
        Check if the issue is open and past its due date.

        Args:
            now: Evaluation instant (timezone-aware)

        Returns:
            True if open, has a due date, and the due date is strictly before now
        """
        return self.is_open and self.due_date is not None and self.due_date < now

    def __str__(self) -> str:
        return f"{self.identifier} {self.title}"
