"""Pytest fixtures for FastAPI server tests.

This module provides test settings with no fallback credentials, a test
client with a fresh cookie jar, and a router for mocked Zoom HTTP calls.
"""

from typing import Callable, Optional
from unittest import mock

import pytest
from fastapi.testclient import TestClient

from src.server.config import Settings
from src.server.dependencies import get_settings
from src.server.main import app

TOKEN_URL = "https://zoom.test/oauth/token"
AUTHORIZE_URL = "https://zoom.test/oauth/authorize"
API_BASE_URL = "https://api.zoom.test"
MEETINGS_URL = f"{API_BASE_URL}/v2/users/me/meetings"


@pytest.fixture
def test_settings() -> Settings:
    """Settings without fallback credentials, independent of the environment."""
    return Settings(
        _env_file=None,
        zoom_s2s_client_id=None,
        zoom_s2s_client_secret=None,
        zoom_s2s_account_id=None,
        zoom_oauth_client_id=None,
        zoom_oauth_client_secret=None,
        zoom_oauth_redirect_uri=None,
        zoom_oauth_scope="meeting:write",
        zoom_token_url=TOKEN_URL,
        zoom_authorize_url=AUTHORIZE_URL,
        zoom_api_base_url=API_BASE_URL,
        http_timeout_seconds=5,
    )


@pytest.fixture
def client(test_settings: Settings) -> TestClient:
    """Create a test client using test settings.

    Example:
        >>> def test_endpoint(client):
        >>>     response = client.get("/api/health")
        >>>     assert response.status_code == 200
    """
    app.dependency_overrides[get_settings] = lambda: test_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def zoom_http(zoom_response) -> Callable:
    """Patch requests.post and route calls by URL.

    Returns a function taking the token and meeting responses to serve.
    The patched mock is returned so tests can inspect calls.
    """
    patchers = []

    def install(token_response=None, meeting_response=None) -> mock.Mock:
        def fake_post(url, **kwargs):
            if url == TOKEN_URL and token_response is not None:
                return token_response
            if url == MEETINGS_URL and meeting_response is not None:
                return meeting_response
            raise AssertionError(f"Unexpected POST to {url}")

        patcher = mock.patch("requests.post", side_effect=fake_post)
        patchers.append(patcher)
        return patcher.start()

    yield install

    for patcher in patchers:
        patcher.stop()


def calls_to(mock_post: mock.Mock, url: str) -> list:
    """Return the calls made to a given URL."""
    return [c for c in mock_post.call_args_list if c[0][0] == url]


def basic_header_of(call) -> Optional[str]:
    """Return the Authorization header of a recorded call."""
    return call[1]["headers"].get("Authorization")
