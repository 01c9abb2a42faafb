"""Exceptions for Zoom API client."""

from typing import Any, Optional


class ZoomAPIError(Exception):
    """Base exception for Zoom API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code returned by Zoom (504 on timeout,
                         None when no response was received)
            detail: Zoom error body (parsed JSON or text) or transport error message
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail if detail is not None else message
        super().__init__(self.message)


class MeetingCreationError(ZoomAPIError):
    """
    Zoom rejected the create-meeting call or could not be reached.

    A 401 here means a token was sent but Zoom rejected it (expired or
    revoked), which is different from having no token at all.
    """

    pass
