"""
Custom exceptions for jsonclient
"""


class JSONClientError(Exception):
    """Base exception for all jsonclient errors"""

    pass


class EncodeError(JSONClientError):
    """Raised when a request body cannot be serialized to JSON (request is never sent)"""

    pass


class TransportError(JSONClientError):
    """
    Raised when the request fails below the HTTP layer.

    This includes:
    - Connection refused / reset
    - DNS resolution failures
    - TLS handshake errors

    The request may or may not have reached the server.
    """

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        self.method = method
        self.url = url
        super().__init__(message)


class HTTPStatusError(JSONClientError):
    """
    Raised when the server answers with a status code >= 400.

    The response body is never parsed. A short snippet of it is kept in
    ``response_text`` for diagnostics only.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
        method: str | None = None,
        url: str | None = None,
        response_text: str | None = None,
    ):
        self.status_code = status_code
        self.status = status
        self.method = method
        self.url = url
        self.response_text = response_text
        super().__init__(message)

    def get_user_guidance(self) -> str:
        """Get user-friendly guidance based on status code"""
        if self.status_code == 401:
            return "Authentication failed. Please check the bearer token configured for the client."
        elif self.status_code == 403:
            return "Access denied. The token is valid but lacks permission for this resource."
        elif self.status_code == 404:
            return (
                "Resource not found. Check the base URL and request path "
                "(slashes are not normalized)."
            )
        elif self.status_code == 405:
            return "Method not allowed. The endpoint does not accept this HTTP verb."
        elif self.status_code == 429:
            return "Rate limit exceeded. Wait a few moments before sending more requests."
        elif self.status_code and self.status_code >= 500:
            return "Server error. This is usually temporary, please try again later."
        else:
            return "Please check the request and try again."


class BodyReadError(JSONClientError):
    """Raised when the response body stream cannot be read completely"""

    pass


class ConfigurationError(JSONClientError):
    """
    Raised when required configuration values are missing or invalid.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")
