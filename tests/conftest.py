"""Shared pytest fixtures for Zoom HTTP mocking."""

import json
from typing import Any, Optional
from unittest import mock

import pytest


def make_response(
    status_code: int = 200, json_data: Any = None, text: Optional[str] = None
) -> mock.Mock:
    """Build a mock requests.Response.

    Args:
        status_code: HTTP status code
        json_data: Parsed JSON body (None means the body is not JSON)
        text: Raw body text (defaults to the JSON encoding of json_data)
    """
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_data is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    else:
        response.json.return_value = json_data
        response.text = text if text is not None else json.dumps(json_data)
    return response


@pytest.fixture
def zoom_response():
    """Factory for mock Zoom HTTP responses."""
    return make_response


@pytest.fixture
def meeting_payload() -> dict:
    """Zoom create-meeting response body."""
    return {
        "id": 123456789,
        "uuid": "aBcDeFgH==",
        "host_id": "host-1",
        "topic": "Test Meeting",
        "type": 2,
        "duration": 30,
        "password": "p4ss",
        "start_url": "https://zoom.us/s/123456789?zak=host",
        "join_url": "https://zoom.us/j/123456789?pwd=abc",
        "settings": {"join_before_host": False, "waiting_room": True},
    }


@pytest.fixture
def user_token_payload() -> dict:
    """Zoom authorization_code token response body."""
    return {
        "access_token": "user_access_token",
        "token_type": "bearer",
        "refresh_token": "user_refresh_token",
        "expires_in": 3599,
        "scope": "meeting:write",
        "api_url": "https://api.zoom.us",
    }
