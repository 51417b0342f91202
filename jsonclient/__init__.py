"""
jsonclient - minimal JSON-over-HTTP client with bearer-token authentication
"""

from .client import Client, new_client
from .exceptions import (
    BodyReadError,
    ConfigurationError,
    EncodeError,
    HTTPStatusError,
    JSONClientError,
    TransportError,
)
from .http_client import HttpClient
from .json_result import JSONResult, JSONType, parse, parse_bytes, valid

__all__ = [
    "BodyReadError",
    "Client",
    "ConfigurationError",
    "EncodeError",
    "HTTPStatusError",
    "HttpClient",
    "JSONClientError",
    "JSONResult",
    "JSONType",
    "TransportError",
    "new_client",
    "parse",
    "parse_bytes",
    "valid",
]
