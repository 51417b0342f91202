"""
Pytest configuration and shared fixtures
"""

import pytest

from jsonclient import Client
from jsonclient.config import Config
from tests.test_helpers import TEST_TOKEN, TEST_URL, create_mock_http_client, create_test_config


@pytest.fixture
def test_config():
    """Injected config with a base URL and token"""
    return Config(create_test_config())


@pytest.fixture
def mock_http_client():
    """Mock transport answering 200 with an empty JSON object"""
    return create_mock_http_client(content=b"{}")


@pytest.fixture
def client(mock_http_client):
    """Client wired to the mock transport"""
    return Client(TEST_URL, token=TEST_TOKEN, http_client=mock_http_client)
