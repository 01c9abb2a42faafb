"""
Helpers for reading Zoom HTTP responses.

Shared by the token exchanger and the Meetings API client.
"""

from typing import Any

import requests

# Synthetic status reported when Zoom does not answer in time
TIMEOUT_STATUS_CODE = 504


def is_success(response: requests.Response) -> bool:
    """True only for 2xx. ``response.ok`` also accepts redirects."""
    return 200 <= response.status_code < 300


def response_detail(response: requests.Response) -> Any:
    """Return the response body as parsed JSON when possible, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text
