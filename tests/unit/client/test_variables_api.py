"""Tests for the variables API HTTP client."""

from unittest.mock import MagicMock

import pytest
import requests

from quant_env.client.api import ApiError, VariablesApi

BASE = "https://api.example.com/v3"
COLLECTION = (
    f"{BASE}/organizations/acme/applications/web/environments/staging/variables"
)


def make_response(status_code=200, body=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.content = b"" if body is None else b"{...}"
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return VariablesApi("test-token", base_url=BASE + "/", timeout=5, session=session)


class TestVariablesApiRequests:
    """Test the requests issued for each API call."""

    def test_list_request(self, client, session):
        """Test listing issues a GET on the collection."""
        session.request.return_value = make_response(body={"A": "1"})

        result = client.list_environment_variables("acme", "web", "staging")

        session.request.assert_called_once_with(
            "GET", COLLECTION, json=None, timeout=5
        )
        assert result == {"A": "1"}

    def test_bulk_set_request(self, client, session):
        """Test bulk set PUTs the environment list."""
        session.request.return_value = make_response()
        entries = [{"name": "A", "value": "1"}]

        client.bulk_set_environment_variables("acme", "web", "staging", entries)

        session.request.assert_called_once_with(
            "PUT", COLLECTION, json={"environment": entries}, timeout=5
        )

    def test_update_request(self, client, session):
        """Test update PUTs a single value on the key URL."""
        session.request.return_value = make_response()

        client.update_environment_variable("acme", "web", "staging", "A", "1")

        session.request.assert_called_once_with(
            "PUT", f"{COLLECTION}/A", json={"value": "1"}, timeout=5
        )

    def test_delete_request(self, client, session):
        """Test delete issues a DELETE on the key URL."""
        session.request.return_value = make_response()

        client.delete_environment_variable("acme", "web", "staging", "A")

        session.request.assert_called_once_with(
            "DELETE", f"{COLLECTION}/A", json=None, timeout=5
        )

    def test_path_segments_are_quoted(self, client, session):
        """Test names with reserved characters are URL-encoded."""
        session.request.return_value = make_response()

        client.delete_environment_variable("acme", "web", "staging", "A/B C")

        url = session.request.call_args[0][1]
        assert url.endswith("/variables/A%2FB%20C")


class TestVariablesApiErrors:
    """Test error translation."""

    def test_error_message_from_body(self, client, session):
        """Test the API's message field becomes the error message."""
        session.request.return_value = make_response(
            403, {"message": "Forbidden for token"}, "Forbidden"
        )

        with pytest.raises(ApiError) as exc_info:
            client.update_environment_variable("acme", "web", "staging", "A", "1")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Forbidden for token"
        assert not exc_info.value.not_found

    def test_error_without_json_body(self, client, session):
        """Test a non-JSON error body falls back to the HTTP reason."""
        session.request.return_value = make_response(
            502, ValueError("no json"), "Bad Gateway"
        )

        with pytest.raises(ApiError) as exc_info:
            client.delete_environment_variable("acme", "web", "staging", "A")

        assert exc_info.value.message == "HTTP 502 Bad Gateway"

    def test_not_found(self, client, session):
        """Test 404 responses are flagged as not found."""
        session.request.return_value = make_response(404, {"message": "Not found"})

        with pytest.raises(ApiError) as exc_info:
            client.delete_environment_variable("acme", "web", "staging", "A")

        assert exc_info.value.not_found

    def test_transport_error(self, client, session):
        """Test connection failures become ApiError without a status code."""
        session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ApiError) as exc_info:
            client.list_environment_variables("acme", "web", "staging")

        assert exc_info.value.status_code is None
        assert "refused" in exc_info.value.message


class TestListResponseDecoding:
    """Test the accepted shapes of the list response."""

    @pytest.mark.parametrize(
        "body",
        [
            {"A": "1", "B": ""},
            {"data": {"A": "1", "B": ""}},
            [{"name": "A", "value": "1"}, {"name": "B", "value": ""}],
            {"data": [{"name": "A", "value": "1"}, {"name": "B", "value": None}]},
        ],
    )
    def test_supported_shapes(self, client, session, body):
        """Test objects and name/value lists decode to the same mapping."""
        session.request.return_value = make_response(body=body)

        result = client.list_environment_variables("acme", "web", "staging")

        assert result == {"A": "1", "B": ""}

    def test_empty_body(self, client, session):
        """Test an empty response means no variables."""
        session.request.return_value = make_response(body=None)

        assert client.list_environment_variables("acme", "web", "staging") == {}

    def test_unexpected_shape(self, client, session):
        """Test a scalar body is rejected."""
        session.request.return_value = make_response(body="nope")

        with pytest.raises(ApiError):
            client.list_environment_variables("acme", "web", "staging")


class TestVariablesApiSession:
    """Test session construction."""

    def test_default_session_headers(self):
        """Test the bearer token and JSON headers are set."""
        client = VariablesApi("secret-token", base_url=BASE)

        headers = client.session.headers
        assert headers["Authorization"] == "Bearer secret-token"
        assert headers["Content-Type"] == "application/json"
        assert headers["User-Agent"].startswith("quant-env/")
        client.close()

    def test_no_automatic_retries(self):
        """Test the mounted adapter makes a single attempt."""
        client = VariablesApi("secret-token", base_url=BASE)

        adapter = client.session.get_adapter("https://api.example.com")
        assert adapter.max_retries.total == 0
        client.close()

    def test_invalid_base_url(self):
        """Test a base URL without scheme is rejected."""
        with pytest.raises(ValueError):
            VariablesApi("token", base_url="dashboard.quantcdn.io")

    def test_context_manager_closes_session(self, session):
        """Test leaving the context closes the session."""
        with VariablesApi("token", base_url=BASE, session=session):
            pass

        session.close.assert_called_once()
