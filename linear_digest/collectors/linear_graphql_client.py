"""
Linear GraphQL API Client

Fetches every non-archived issue from the Linear GraphQL API using cursor
pagination, and converts the nodes into Issue domain models.

Usage:
    from linear_digest.collectors.linear_graphql_client import get_linear_client

    client = get_linear_client(config.linear)
    issues = client.fetch_all_issues()

API Documentation:
    https://developers.linear.app/docs/graphql/working-with-the-graphql-api
"""

from typing import Any

import requests

from linear_digest.collectors.linear_transformers import IssueTransformer, MalformedIssueError
from linear_digest.core import get_logger, post
from linear_digest.domain.constants import linear_api
from linear_digest.domain.issue import Issue
from linear_digest.secure_config import LinearConfig
from linear_digest.utils.error_handling import log_and_raise

logger = get_logger(__name__)


ISSUES_QUERY = """
query Issues($first: Int!, $after: String) {
  issues(first: $first, after: $after, filter: { archived: { eq: false } }) {
    nodes {
      id
      identifier
      title
      url
      createdAt
      updatedAt
      dueDate
      completedAt
      state { name type }
      assignee { name }
      project { name }
      team { name }
      priority
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""


class FetchError(Exception):
    """
    Raised when the issue list cannot be retrieved.

    Attributes:
        status_code: HTTP status of the failing response, if one was received
        auth_failed: True when Linear rejected the API key
    """

    def __init__(self, message: str, status_code: int | None = None, auth_failed: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.auth_failed = auth_failed


class TooManyPagesError(FetchError):
    """Raised when pagination does not finish within the configured page ceiling."""

    def __init__(self, max_pages: int, fetched_issues: int):
        super().__init__(
            f"Linear pagination exceeded {max_pages} pages ({fetched_issues} issues fetched); "
            "raise LINEAR_MAX_PAGES if this volume is expected"
        )
        self.max_pages = max_pages
        self.fetched_issues = fetched_issues


class LinearGraphQLClient:
    """
    Linear GraphQL API client using direct HTTP calls.

    Features:
    - Cursor pagination over the issues connection
    - Page ceiling to stop a runaway pagination loop
    - Every failure surfaced as FetchError (no retries)
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = linear_api.GRAPHQL_URL,
        page_size: int = linear_api.PAGE_SIZE,
        max_pages: int = linear_api.MAX_PAGES,
    ):
        """
        Initialize Linear client.

        Args:
            api_key: Linear API key (sent as the Authorization header)
            api_url: GraphQL endpoint
            page_size: Issues per page
            max_pages: Maximum pages fetched before TooManyPagesError

        Raises:
            ValueError: If api_key or api_url is empty
        """
        if not api_key or not api_url:
            raise ValueError("api_key and api_url are required")

        self.api_url = api_url
        self.page_size = page_size
        self.max_pages = max_pages
        self.headers = {
            "Authorization": api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """
        Execute one GraphQL request and return its "data" object.

        Raises:
            FetchError: On transport errors, non-2xx status, invalid JSON or GraphQL errors
        """
        context = {"url": self.api_url, "variables": variables}

        try:
            response = post(self.api_url, headers=self.headers, json={"query": query, "variables": variables})
        except requests.RequestException as e:
            log_and_raise(logger, FetchError(f"Linear API unreachable: {e}"), context, "Linear API request", cause=e)

        status_code = response.status_code
        if status_code in (401, 403):
            log_and_raise(
                logger,
                FetchError(f"Linear rejected the API key (HTTP {status_code})", status_code, auth_failed=True),
                context,
                "Linear authentication",
            )
        if not 200 <= status_code < 300:
            log_and_raise(
                logger,
                FetchError(f"Linear API returned HTTP {status_code}: {response.text[:200]}", status_code),
                context,
                "Linear API request",
            )

        try:
            body = response.json()
        except ValueError as e:
            log_and_raise(
                logger,
                FetchError("Linear API returned invalid JSON", status_code),
                context,
                "Linear API request",
                cause=e,
            )

        if not isinstance(body, dict):
            log_and_raise(
                logger, FetchError("Linear API response is not an object", status_code), context, "Linear API request"
            )

        if body.get("errors"):
            errors = body["errors"]
            messages = "; ".join(str(error.get("message", error)) for error in errors if isinstance(error, dict))
            log_and_raise(
                logger,
                FetchError(f"Linear GraphQL errors: {messages or errors}", status_code),
                context,
                "Linear GraphQL query",
            )

        data = body.get("data")
        if not isinstance(data, dict):
            log_and_raise(
                logger, FetchError("Linear API response has no data", status_code), context, "Linear API request"
            )

        return data

    def fetch_issues_page(self, after: str | None = None) -> tuple[list[Issue], bool, str | None]:
        """
        Fetch one page of non-archived issues.

        Args:
            after: Cursor from the previous page's pageInfo.endCursor, or None for the first page

        Returns:
            (issues, has_next_page, end_cursor)

        Raises:
            FetchError: If the request fails or the payload is malformed
        """
        data = self._execute(ISSUES_QUERY, {"first": self.page_size, "after": after})

        connection = data.get("issues")
        if not isinstance(connection, dict):
            raise FetchError("Linear response is missing data.issues")

        nodes = connection.get("nodes")
        page_info = connection.get("pageInfo")
        if not isinstance(nodes, list) or not isinstance(page_info, dict):
            raise FetchError("Linear response is missing issues.nodes or issues.pageInfo")

        try:
            issues = IssueTransformer.transform_nodes(nodes)
        except MalformedIssueError as e:
            raise FetchError(f"Malformed issue in Linear response: {e}") from e

        has_next_page = page_info.get("hasNextPage")
        if not isinstance(has_next_page, bool):
            raise FetchError(f"Linear response has invalid pageInfo.hasNextPage: {has_next_page!r}")

        end_cursor = page_info.get("endCursor")
        if has_next_page and not end_cursor:
            raise FetchError("Linear reported another page but no endCursor")

        return issues, has_next_page, end_cursor

    def fetch_all_issues(self) -> list[Issue]:
        """
        Fetch every non-archived issue, following cursors until exhausted.

        Issues are returned in page order, then in order within each page.

        Returns:
            All issues

        Raises:
            FetchError: If any page request fails
            TooManyPagesError: If more than max_pages pages would be needed
        """
        all_issues: list[Issue] = []
        cursor: str | None = None
        pages = 0

        while True:
            if pages >= self.max_pages:
                raise TooManyPagesError(self.max_pages, len(all_issues))

            issues, has_next_page, cursor = self.fetch_issues_page(after=cursor)
            pages += 1
            all_issues.extend(issues)
            logger.debug(f"Fetched page {pages}: {len(issues)} issues (total {len(all_issues)})")

            if not has_next_page:
                break

        logger.info(f"Fetched {len(all_issues)} issues from Linear in {pages} page(s)")
        return all_issues


def get_linear_client(config: LinearConfig) -> LinearGraphQLClient:
    """
    Build a Linear client from validated configuration.

    Args:
        config: Linear configuration

    Returns:
        LinearGraphQLClient instance
    """
    return LinearGraphQLClient(api_key=config.api_key, api_url=config.api_url, max_pages=config.max_pages)
