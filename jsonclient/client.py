"""
JSON API client with bearer-token authentication

Every call is one blocking request/response cycle:
build request -> send via transport -> check status -> read body -> parse JSON.
Errors are raised to the caller immediately; nothing is retried.
"""

import json
import os
from typing import Any

import requests
from requests.structures import CaseInsensitiveDict

from .config import Config, config
from .exceptions import (
    BodyReadError,
    ConfigurationError,
    EncodeError,
    HTTPStatusError,
    TransportError,
)
from .http_client import HttpClient, default_http_client
from .json_result import JSONResult, parse_bytes
from .logging_config import get_module_logger

logger = get_module_logger("client")

JSON_HEADERS = {"Content-Type": "application/json"}

# Bytes of an error response kept on HTTPStatusError for diagnostics
MAX_ERROR_BODY = 1024


class Client:
    """
    Minimal JSON-over-HTTP client

    Holds a base URL, a transport and an optional bearer token. The client keeps
    no per-call state, so one instance may serve concurrent callers as long as
    the transport allows it.
    """

    def __init__(self, base_url: str, token: str = "", http_client: HttpClient | None = None):
        """
        Args:
            base_url: Prefix for every request path (concatenated verbatim)
            token: Bearer token sent on every request when non-empty
            http_client: Transport for making requests (uses default if None)
        """
        self.base_url = base_url
        self.token = token
        self.http_client = http_client or default_http_client

    @classmethod
    def from_config(
        cls, config_obj: Config | None = None, http_client: HttpClient | None = None
    ) -> "Client":
        """
        Build a client from the ``client`` config section

        The token comes from ``client.token``, or from the environment variable
        named by ``client.token_env`` when the configured token is empty.

        Raises:
            ConfigurationError: If client.base_url is not configured
        """
        if config_obj is None:
            config_obj = config

        base_url = config_obj.get_required("client.base_url")
        if not isinstance(base_url, str) or not base_url:
            raise ConfigurationError("must be a non-empty string", config_key="client.base_url")

        token = config_obj.get("client.token") or ""
        if not token:
            token_env = config_obj.get("client.token_env", "JSONCLIENT_TOKEN")
            token = os.getenv(token_env, "") if token_env else ""

        return cls(base_url, token=token, http_client=http_client)

    def do(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> JSONResult:
        """
        Perform a request and return the response body as a JSONResult

        Args:
            method: HTTP verb
            path: Appended to base_url as-is (no slash normalization)
            body: JSON-serializable value; None sends no body
            headers: Extra headers, applied after the Authorization header

        Returns:
            Parsed response body (malformed JSON yields empty lookups, not an error)

        Raises:
            EncodeError: body is not JSON-serializable; nothing was sent
            TransportError: connection-level failure
            HTTPStatusError: response status >= 400
            BodyReadError: the response body could not be read
        """
        url = self.base_url + path

        data = None
        if body is not None:
            try:
                data = json.dumps(body, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise EncodeError(f"Could not encode request body for {method} {url}: {e}") from e

        request_headers: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        if self.token:
            request_headers["Authorization"] = f"Bearer {self.token}"
        for key, value in (headers or {}).items():
            request_headers[key] = value

        logger.debug(f"{method} {url}")

        try:
            response = self.http_client.request(method, url, data=data, headers=request_headers)
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"Request {method} {url} failed: {e}", method=method, url=url
            ) from e

        try:
            if response.status_code >= 400:
                status = f"{response.status_code} {response.reason or ''}".strip()
                raise HTTPStatusError(
                    f"request failed with status: {status}",
                    status_code=response.status_code,
                    status=status,
                    method=method,
                    url=url,
                    response_text=_error_snippet(response),
                )

            try:
                content = response.content
            except (requests.exceptions.RequestException, OSError) as e:
                raise BodyReadError(f"Could not read response body of {method} {url}: {e}") from e

            logger.debug(f"{method} {url} -> {response.status_code} ({len(content)} bytes)")
            return parse_bytes(content)
        finally:
            response.close()

    def get(self, path: str) -> JSONResult:
        """Perform a GET request"""
        return self.do("GET", path)

    def post(self, path: str, body: Any) -> JSONResult:
        """Perform a POST request with a JSON body"""
        return self.do("POST", path, body, JSON_HEADERS)

    def put(self, path: str, body: Any) -> JSONResult:
        """Perform a PUT request with a JSON body"""
        return self.do("PUT", path, body, JSON_HEADERS)

    def patch(self, path: str, body: Any) -> JSONResult:
        """Perform a PATCH request with a JSON body"""
        return self.do("PATCH", path, body, JSON_HEADERS)

    def delete(self, path: str) -> JSONResult:
        """Perform a DELETE request"""
        return self.do("DELETE", path)


def new_client(base_url: str, token: str = "", http_client: HttpClient | None = None) -> Client:
    """Create a client; the base URL and token are stored verbatim"""
    return Client(base_url, token=token, http_client=http_client)


def _error_snippet(response: requests.Response) -> str | None:
    # Best effort: a failing body read must not mask the status error
    try:
        chunk = next(response.iter_content(MAX_ERROR_BODY), b"")
    except (requests.exceptions.RequestException, OSError):
        return None
    return chunk.decode("utf-8", errors="replace")
