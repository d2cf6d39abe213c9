"""
Pytest configuration and shared fixtures

Provides common test fixtures for issues, Linear API payloads and configuration.
"""

from datetime import UTC, datetime, timedelta

import pytest

from linear_digest.domain.issue import Issue, WorkflowState

# ===== Domain Model Fixtures =====


@pytest.fixture
def sample_now():
    """Provide a consistent evaluation instant for testing"""
    return datetime(2026, 10, 16, 15, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_issue(sample_now):
    """Factory for Issue domain models with sensible defaults"""
    counter = iter(range(1, 100_000))

    def _make(**overrides) -> Issue:
        number = next(counter)
        fields = {
            "id": f"issue-{number}",
            "identifier": f"ENG-{number}",
            "title": f"Issue {number}",
            "url": f"https://linear.app/acme/issue/ENG-{number}",
            "created_at": sample_now - timedelta(days=30),
            "updated_at": sample_now - timedelta(days=1),
            "state": WorkflowState(name="Todo", type="unstarted"),
        }
        fields.update(overrides)
        return Issue(**fields)

    return _make


@pytest.fixture
def scenario_issues(make_issue, sample_now):
    """Three open issues: overdue (Ann/Core), due next week (Ann/Core), no due date (unassigned)"""
    return [
        make_issue(assignee_name="Ann", project_name="Core", due_date=sample_now - timedelta(days=1)),
        make_issue(assignee_name="Ann", project_name="Core", due_date=sample_now + timedelta(days=7)),
        make_issue(),
    ]


# ===== Linear API Payload Fixtures =====


def make_node(number: int, **overrides) -> dict:
    """Build a raw Linear GraphQL issue node"""
    node = {
        "id": f"uuid-{number}",
        "identifier": f"ENG-{number}",
        "title": f"Issue {number}",
        "url": f"https://linear.app/acme/issue/ENG-{number}",
        "createdAt": "2026-09-01T09:00:00.000Z",
        "updatedAt": "2026-10-10T12:30:00.000Z",
        "dueDate": None,
        "completedAt": None,
        "state": {"name": "Todo", "type": "unstarted"},
        "assignee": {"name": "Ann"},
        "project": {"name": "Core"},
        "team": {"name": "Engineering"},
        "priority": 2,
    }
    node.update(overrides)
    return node


def make_page(start: int, count: int, has_next_page: bool, end_cursor: str | None = None) -> dict:
    """Build a Linear GraphQL issues response body"""
    return {
        "data": {
            "issues": {
                "nodes": [make_node(number) for number in range(start, start + count)],
                "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
            }
        }
    }


@pytest.fixture
def sample_node():
    """Provide a raw Linear issue node"""
    return make_node(1)


@pytest.fixture
def node_factory():
    """Provide the raw issue node builder"""
    return make_node


@pytest.fixture
def page_factory():
    """Provide the issues response body builder"""
    return make_page


# ===== Environment Fixtures =====


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every digest environment variable and skip .env loading"""
    for name in (
        "LINEAR_API_KEY",
        "LINEAR_API_URL",
        "LINEAR_MAX_PAGES",
        "DISCORD_WEBHOOK_URL",
        "SMTP_HOST",
        "SMTP_PORT",
        "SMTP_USER",
        "SMTP_PASS",
        "MAIL_FROM",
        "MAIL_TO",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("linear_digest.secure_config.load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch
