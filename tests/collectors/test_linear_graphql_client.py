"""
Unit Tests for Linear GraphQL Client

Test Coverage:
- Client initialization and headers
- Cursor pagination (page order, cursor threading)
- Page ceiling (TooManyPagesError)
- Error handling (transport, 401/403, 5xx, invalid JSON, GraphQL errors, malformed payloads)
"""

from unittest.mock import Mock, patch

import pytest
import requests

from linear_digest.collectors.linear_graphql_client import (
    ISSUES_QUERY,
    FetchError,
    LinearGraphQLClient,
    TooManyPagesError,
    get_linear_client,
)
from linear_digest.secure_config import LinearConfig

POST_TARGET = "linear_digest.collectors.linear_graphql_client.post"


def mock_response(body=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    response.text = str(body)
    if json_error:
        response.json = Mock(side_effect=json_error)
    else:
        response.json = Mock(return_value=body)
    return response


@pytest.fixture
def client():
    return LinearGraphQLClient(api_key="lin_api_test_key_123", api_url="https://api.linear.app/graphql")


class TestClientInitialization:
    """Test client initialization and configuration"""

    def test_headers_carry_api_key(self, client):
        """Test the API key is sent as the Authorization header"""
        assert client.headers["Authorization"] == "lin_api_test_key_123"
        assert client.headers["Content-Type"] == "application/json"

    def test_default_page_size(self, client):
        """Test the default page size is 200"""
        assert client.page_size == 200

    def test_empty_api_key_raises_error(self):
        """Test that an empty API key raises ValueError"""
        with pytest.raises(ValueError, match="api_key and api_url are required"):
            LinearGraphQLClient(api_key="")

    def test_get_linear_client_uses_config(self):
        """Test the factory copies URL and page ceiling from config"""
        config = LinearConfig(api_key="lin_api_abc", api_url="https://linear.example.com/graphql", max_pages=3)

        client = get_linear_client(config)

        assert client.api_url == "https://linear.example.com/graphql"
        assert client.max_pages == 3


class TestPagination:
    """Test cursor pagination"""

    def test_two_pages_combined_in_order(self, client, page_factory):
        """Test 200 + 50 issues across two pages yield 250 issues in order"""
        responses = [
            mock_response(page_factory(1, 200, has_next_page=True, end_cursor="cursor-1")),
            mock_response(page_factory(201, 50, has_next_page=False)),
        ]

        with patch(POST_TARGET, side_effect=responses) as mock_post:
            issues = client.fetch_all_issues()

        assert len(issues) == 250
        assert [issue.identifier for issue in issues] == [f"ENG-{n}" for n in range(1, 251)]
        assert mock_post.call_count == 2

    def test_cursor_threaded_between_pages(self, client, page_factory):
        """Test the first request has no cursor and the second uses endCursor"""
        responses = [
            mock_response(page_factory(1, 2, has_next_page=True, end_cursor="cursor-1")),
            mock_response(page_factory(3, 1, has_next_page=False)),
        ]

        with patch(POST_TARGET, side_effect=responses) as mock_post:
            client.fetch_all_issues()

        first_body = mock_post.call_args_list[0].kwargs["json"]
        second_body = mock_post.call_args_list[1].kwargs["json"]
        assert first_body["query"] == ISSUES_QUERY
        assert first_body["variables"] == {"first": 200, "after": None}
        assert second_body["variables"] == {"first": 200, "after": "cursor-1"}

    def test_single_page(self, client, page_factory):
        """Test a single page stops after one request"""
        with patch(POST_TARGET, return_value=mock_response(page_factory(1, 5, has_next_page=False))) as mock_post:
            issues = client.fetch_all_issues()

        assert len(issues) == 5
        assert mock_post.call_count == 1

    def test_empty_result(self, client, page_factory):
        """Test an empty workspace returns no issues"""
        with patch(POST_TARGET, return_value=mock_response(page_factory(1, 0, has_next_page=False))):
            assert client.fetch_all_issues() == []

    def test_query_filters_archived_issues(self):
        """Test the query asks the server for non-archived issues only"""
        assert "archived: { eq: false }" in ISSUES_QUERY
        assert "pageInfo { hasNextPage endCursor }" in ISSUES_QUERY


class TestPageCeiling:
    """Test the pagination safety limit"""

    def test_exceeding_max_pages_raises(self, page_factory):
        """Test an API that never finishes hits TooManyPagesError"""
        client = LinearGraphQLClient(api_key="lin_api_key", max_pages=3)
        endless = mock_response(page_factory(1, 2, has_next_page=True, end_cursor="again"))

        with patch(POST_TARGET, return_value=endless) as mock_post:
            with pytest.raises(TooManyPagesError) as exc_info:
                client.fetch_all_issues()

        assert mock_post.call_count == 3
        assert exc_info.value.max_pages == 3
        assert exc_info.value.fetched_issues == 6

    def test_too_many_pages_is_fetch_error(self):
        """Test TooManyPagesError can be handled as a FetchError"""
        assert issubclass(TooManyPagesError, FetchError)

    def test_last_page_at_ceiling_succeeds(self, page_factory):
        """Test finishing exactly on the ceiling is not an error"""
        client = LinearGraphQLClient(api_key="lin_api_key", max_pages=2)
        responses = [
            mock_response(page_factory(1, 1, has_next_page=True, end_cursor="c1")),
            mock_response(page_factory(2, 1, has_next_page=False)),
        ]

        with patch(POST_TARGET, side_effect=responses):
            assert len(client.fetch_all_issues()) == 2


class TestErrorHandling:
    """Test failures surface as FetchError"""

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_rejected(self, client, status_code):
        """Test rejected credentials are flagged as auth failures"""
        with patch(POST_TARGET, return_value=mock_response({}, status_code=status_code)):
            with pytest.raises(FetchError) as exc_info:
                client.fetch_all_issues()

        assert exc_info.value.auth_failed is True
        assert exc_info.value.status_code == status_code

    def test_server_error(self, client):
        """Test non-2xx responses raise FetchError"""
        with patch(POST_TARGET, return_value=mock_response({"error": "boom"}, status_code=500)):
            with pytest.raises(FetchError, match="HTTP 500") as exc_info:
                client.fetch_all_issues()

        assert exc_info.value.auth_failed is False

    def test_network_error(self, client):
        """Test transport errors raise FetchError"""
        with patch(POST_TARGET, side_effect=requests.ConnectionError("connection refused")):
            with pytest.raises(FetchError, match="unreachable"):
                client.fetch_all_issues()

    def test_invalid_json(self, client):
        """Test unparseable bodies raise FetchError"""
        with patch(POST_TARGET, return_value=mock_response(json_error=ValueError("bad json"))):
            with pytest.raises(FetchError, match="invalid JSON"):
                client.fetch_all_issues()

    def test_graphql_errors(self, client):
        """Test GraphQL error arrays raise FetchError"""
        body = {"errors": [{"message": "Field 'issues' is not defined"}], "data": None}

        with patch(POST_TARGET, return_value=mock_response(body)):
            with pytest.raises(FetchError, match="Field 'issues' is not defined"):
                client.fetch_all_issues()

    def test_missing_data(self, client):
        """Test a response without data raises FetchError"""
        with patch(POST_TARGET, return_value=mock_response({"something": "else"})):
            with pytest.raises(FetchError, match="no data"):
                client.fetch_all_issues()

    def test_missing_page_info(self, client):
        """Test a connection without pageInfo raises FetchError"""
        body = {"data": {"issues": {"nodes": []}}}

        with patch(POST_TARGET, return_value=mock_response(body)):
            with pytest.raises(FetchError, match="pageInfo"):
                client.fetch_all_issues()

    def test_missing_has_next_page(self, client):
        """Test pageInfo without hasNextPage raises FetchError instead of ending the fetch"""
        body = {"data": {"issues": {"nodes": [], "pageInfo": {"endCursor": "c1"}}}}

        with patch(POST_TARGET, return_value=mock_response(body)):
            with pytest.raises(FetchError, match="hasNextPage"):
                client.fetch_all_issues()

    def test_non_boolean_has_next_page(self, page_factory):
        """Test a string hasNextPage is rejected on the first page, not reported as too many pages"""
        body = page_factory(1, 1, has_next_page=True, end_cursor="c1")
        body["data"]["issues"]["pageInfo"]["hasNextPage"] = "false"
        client = LinearGraphQLClient(api_key="lin_api_test_key_123", max_pages=3)

        with patch(POST_TARGET, return_value=mock_response(body)) as mock_post:
            with pytest.raises(FetchError, match="hasNextPage") as exc_info:
                client.fetch_all_issues()

        assert not isinstance(exc_info.value, TooManyPagesError)
        assert mock_post.call_count == 1

    def test_next_page_without_cursor(self, client, page_factory):
        """Test hasNextPage without endCursor raises FetchError"""
        with patch(POST_TARGET, return_value=mock_response(page_factory(1, 1, has_next_page=True, end_cursor=None))):
            with pytest.raises(FetchError, match="endCursor"):
                client.fetch_all_issues()

    def test_malformed_node(self, client, node_factory):
        """Test a node with an unparseable date raises FetchError"""
        body = {
            "data": {
                "issues": {
                    "nodes": [node_factory(1, createdAt="yesterday")],
                    "pageInfo": {"hasNextPage": False, "endCursor": None},
                }
            }
        }

        with patch(POST_TARGET, return_value=mock_response(body)):
            with pytest.raises(FetchError, match="Malformed issue"):
                client.fetch_all_issues()

    def test_failure_on_second_page_aborts(self, client, page_factory):
        """Test a failing later page aborts the whole fetch"""
        responses = [
            mock_response(page_factory(1, 2, has_next_page=True, end_cursor="c1")),
            mock_response({}, status_code=502),
        ]

        with patch(POST_TARGET, side_effect=responses):
            with pytest.raises(FetchError, match="HTTP 502"):
                client.fetch_all_issues()
