"""HTTP transport abstraction for dependency injection and testability."""

from typing import Any

import requests


class HttpClient:
    """
    HTTP transport wrapper for making requests.

    This abstraction enables:
    - Dependency injection for testing
    - Easy mocking in unit tests
    - Connection pooling through a shared requests.Session
    """

    def __init__(self, session: requests.Session | None = None):
        """
        Args:
            session: Optional pre-configured requests.Session (a new one is created if None)
        """
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        **kwargs,
    ) -> requests.Response:
        """
        Send a request without reading the response body.

        Args:
            method: HTTP verb (GET, POST, ...)
            url: Fully-qualified URL to request
            data: Optional encoded request body
            headers: Optional HTTP headers
            timeout: Optional request timeout in seconds (None keeps the transport default)
            **kwargs: Additional arguments to pass to requests.Session.request()

        Returns:
            requests.Response object with an unread body; callers must close it
        """
        return self.session.request(
            method, url, data=data, headers=headers, timeout=timeout, stream=True, **kwargs
        )

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


# Create a default instance for callers that don't need their own pool
default_http_client = HttpClient()
