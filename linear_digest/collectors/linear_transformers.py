"""
Linear GraphQL Response Transformers

Converts raw issue nodes from the Linear GraphQL API into Issue domain models.

Linear nests the optional relations as objects that are null when unset:

    {
        "id": "7b0e...",
        "identifier": "ENG-42",
        "title": "Fix login redirect",
        "url": "https://linear.app/acme/issue/ENG-42",
        "createdAt": "2026-10-01T09:00:00.000Z",
        "updatedAt": "2026-10-02T11:15:00.000Z",
        "dueDate": "2026-10-20",
        "completedAt": null,
        "state": {"name": "In Progress", "type": "started"},
        "assignee": {"name": "Ann"},
        "project": null,
        "team": {"name": "Engineering"},
        "priority": 2
    }

Usage:
    from linear_digest.collectors.linear_transformers import IssueTransformer

    issues = IssueTransformer.transform_nodes(response["data"]["issues"]["nodes"])
"""

from typing import Any

from linear_digest.domain.issue import Issue, WorkflowState
from linear_digest.utils.datetime_utils import parse_linear_date, parse_linear_timestamp


class MalformedIssueError(ValueError):
    """Raised when an issue node is missing required fields or has unparseable values."""

    pass


def _relation_name(node: dict[str, Any], key: str) -> str | None:
    relation = node.get(key)
    if not isinstance(relation, dict):
        return None
    return relation.get("name") or None


class IssueTransformer:
    """
    Transform Linear issue nodes to Issue domain models.
    """

    REQUIRED_FIELDS = ("id", "identifier", "title", "url", "createdAt", "updatedAt")

    @staticmethod
    def transform_node(node: dict[str, Any]) -> Issue:
        """
        Transform one GraphQL issue node.

        Args:
            node: Issue node from data.issues.nodes

        Returns:
            Issue domain model

        Raises:
            MalformedIssueError: If a required field is missing or a date cannot be parsed
        """
        if not isinstance(node, dict):
            raise MalformedIssueError(f"Issue node must be an object, got {type(node).__name__}")

        missing = [name for name in IssueTransformer.REQUIRED_FIELDS if node.get(name) is None]
        if missing:
            raise MalformedIssueError(f"Issue node {node.get('identifier', '?')} missing fields: {', '.join(missing)}")

        state = node.get("state") if isinstance(node.get("state"), dict) else {}
        priority = node.get("priority")

        try:
            return Issue(
                id=node["id"],
                identifier=node["identifier"],
                title=node["title"],
                url=node["url"],
                created_at=parse_linear_timestamp(node["createdAt"]),
                updated_at=parse_linear_timestamp(node["updatedAt"]),
                state=WorkflowState(name=state.get("name") or "", type=state.get("type") or ""),
                due_date=parse_linear_date(node.get("dueDate")),
                completed_at=parse_linear_timestamp(node.get("completedAt")),
                assignee_name=_relation_name(node, "assignee"),
                project_name=_relation_name(node, "project"),
                team_name=_relation_name(node, "team"),
                priority=int(priority) if priority is not None else None,
            )
        except (TypeError, ValueError) as e:
            raise MalformedIssueError(f"Issue node {node['identifier']} has invalid values: {e}") from e

    @staticmethod
    def transform_nodes(nodes: list[dict[str, Any]]) -> list[Issue]:
        """
        Transform a page of issue nodes, preserving order.

        Args:
            nodes: Issue nodes from one GraphQL page

        Returns:
            List of Issue domain models
        """
        return [IssueTransformer.transform_node(node) for node in nodes]
