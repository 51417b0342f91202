"""
End-to-end tests against a throwaway HTTP server on localhost

These exercise the real requests-based transport: socket errors, streamed
bodies and header handling, without leaving the machine.
"""

import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from jsonclient import Client, HTTPStatusError, HttpClient, TransportError


class EchoHandler(BaseHTTPRequestHandler):
    """Answers /echo with the request it received and /status/<code> with that code"""

    def _reply(self, status, payload=None):
        body = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        raw_body = self.rfile.read(length).decode("utf-8") if length else None

        if self.path.startswith("/status/"):
            self._reply(int(self.path.rsplit("/", 1)[1]), {"error": "requested"})
            return

        self._reply(
            200,
            {
                "method": self.command,
                "path": self.path,
                "authorization": self.headers.get("Authorization"),
                "content_type": self.headers.get("Content-Type"),
                "body": raw_body,
            },
        )

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_PATCH = _handle
    do_DELETE = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def transport():
    with HttpClient() as http_client:
        # Ignore proxy settings from the environment
        http_client.session.trust_env = False
        yield http_client


def test_get_with_token(server_url, transport):
    client = Client(server_url, "secret", http_client=transport)

    result = client.get("/echo")

    assert result.get("method").as_str() == "GET"
    assert result.get("authorization").as_str() == "Bearer secret"
    assert result.get("body").value() is None


def test_get_without_token(server_url, transport):
    client = Client(server_url, http_client=transport)

    result = client.get("/echo")

    assert result.get("authorization").value() is None


@pytest.mark.parametrize("verb", ["post", "put", "patch"])
def test_body_verbs(server_url, transport, verb):
    client = Client(server_url, "secret", http_client=transport)

    result = getattr(client, verb)("/echo", {"a": 1})

    assert result.get("method").as_str() == verb.upper()
    assert result.get("content_type").as_str() == "application/json"
    assert json.loads(result.get("body").as_str()) == {"a": 1}


def test_delete(server_url, transport):
    client = Client(server_url, http_client=transport)

    assert client.delete("/echo").get("method").as_str() == "DELETE"


def test_error_status(server_url, transport):
    client = Client(server_url, http_client=transport)

    with pytest.raises(HTTPStatusError) as exc_info:
        client.get("/status/405")

    assert exc_info.value.status_code == 405
    assert exc_info.value.status == "405 Method Not Allowed"


def test_repeated_get_is_stable(server_url, transport):
    client = Client(server_url, http_client=transport)

    assert client.get("/echo") == client.get("/echo")


def test_connection_refused(transport):
    # Reserve a free port, then release it so nothing is listening there
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    client = Client(f"http://127.0.0.1:{port}", http_client=transport)

    with pytest.raises(TransportError):
        client.get("/echo")
