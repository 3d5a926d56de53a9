"""HTTP client for the Quant Cloud environment variables API.

A thin wrapper over ``requests``: one session per client, bearer-token
authentication and one attempt per call. Any non-2xx response raises
``ApiError`` carrying the status code and the API's error message.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlparse

import requests
from requests.adapters import HTTPAdapter

from quant_env import __version__
from quant_env.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://dashboard.quantcdn.io/api/v3"
DEFAULT_TIMEOUT = 30


class ApiError(Exception):
    """Error response (or transport failure) from the variables API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


def _error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    reason = response.reason or "error"
    return f"HTTP {response.status_code} {reason}"


class VariablesApi:
    """Client for one organization's environment variables endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        parsed_url = urlparse(base_url)
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValueError(f"Invalid URL format: {base_url}")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or self._create_session(api_key)

    def _create_session(self, api_key: str) -> requests.Session:
        """Create a session with auth headers and no automatic retries."""
        session = requests.Session()
        session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": f"quant-env/{__version__}",
            }
        )

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "VariablesApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _variables_url(
        self, organization: str, application: str, environment: str
    ) -> str:
        parts = [
            "organizations",
            organization,
            "applications",
            application,
            "environments",
            environment,
            "variables",
        ]
        return "/".join([self.base_url] + [quote(part, safe="") for part in parts])

    def _variable_url(
        self, organization: str, application: str, environment: str, key: str
    ) -> str:
        collection = self._variables_url(organization, application, environment)
        return f"{collection}/{quote(key, safe='')}"

    def _request(
        self, method: str, url: str, payload: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """Send one request and raise ApiError on failure."""
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, json=payload, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            raise ApiError(_error_message(response), response.status_code)
        return response

    def list_environment_variables(
        self, organization: str, application: str, environment: str
    ) -> Dict[str, str]:
        """Return every variable of the environment as a name to value map."""
        url = self._variables_url(organization, application, environment)
        response = self._request("GET", url)
        try:
            body = response.json() if response.content else {}
        except ValueError as e:
            raise ApiError(f"Invalid JSON in list response: {e}") from e
        return _decode_variables(body)

    def bulk_set_environment_variables(
        self,
        organization: str,
        application: str,
        environment: str,
        variables: List[Dict[str, str]],
    ) -> None:
        """Replace all variables of the environment with ``variables``."""
        url = self._variables_url(organization, application, environment)
        self._request("PUT", url, {"environment": variables})

    def update_environment_variable(
        self,
        organization: str,
        application: str,
        environment: str,
        key: str,
        value: str,
    ) -> None:
        """Create or update a single variable."""
        url = self._variable_url(organization, application, environment, key)
        self._request("PUT", url, {"value": value})

    def delete_environment_variable(
        self, organization: str, application: str, environment: str, key: str
    ) -> None:
        url = self._variable_url(organization, application, environment, key)
        self._request("DELETE", url)


def _decode_variables(body: Any) -> Dict[str, str]:
    """Normalize a list response into a name to value mapping.

    The API answers either with an object keyed by name or with a list of
    ``{"name": ..., "value": ...}`` entries, optionally wrapped in ``data``.
    """
    if isinstance(body, dict) and isinstance(body.get("data"), (dict, list)):
        body = body["data"]

    if body is None:
        return {}

    if isinstance(body, list):
        variables = {}
        for entry in body:
            if not isinstance(entry, dict) or "name" not in entry:
                raise ApiError("Unexpected variable entry in list response")
            value = entry.get("value")
            variables[str(entry["name"])] = "" if value is None else str(value)
        return variables

    if isinstance(body, dict):
        return {
            str(name): "" if value is None else str(value)
            for name, value in body.items()
        }

    raise ApiError(f"Unexpected list response type: {type(body).__name__}")
