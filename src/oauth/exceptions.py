"""
OAuth exception classes for Zoom credential acquisition.

This module defines the exception hierarchy for failures that happen while
resolving credentials, running the user authorization flow, and exchanging
grants for access tokens.
"""

from typing import Any, Optional


class ZoomOAuthError(Exception):
    """Base exception for all Zoom OAuth errors."""

    pass


class MissingCredentialsError(ZoomOAuthError):
    """Server-to-Server credentials are incomplete after merging with configuration."""

    pass


class MissingOAuthConfigError(ZoomOAuthError):
    """OAuth app configuration is incomplete at login time."""

    pass


class MissingSessionStateError(ZoomOAuthError):
    """Session does not hold the state expected from an earlier step of the flow."""

    pass


class UnauthenticatedError(ZoomOAuthError):
    """No access token stored in the session (need to log in first)."""

    pass


class AuthorizationDeniedError(ZoomOAuthError):
    """Zoom redirected back to the callback with an error instead of a code."""

    def __init__(self, error: str, description: str = ""):
        self.error = error
        self.description = description
        message = f"{error} - {description}" if description else error
        super().__init__(message)


class TokenExchangeError(ZoomOAuthError):
    """Zoom token endpoint rejected the grant or could not be reached."""

    def __init__(
        self, message: str, status_code: Optional[int] = None, detail: Any = None
    ):
        """
        Initialize token exchange error.

        Args:
            message: Error message
            status_code: HTTP status returned by Zoom (504 on timeout,
                         None when no response was received)
            detail: Zoom error body (parsed JSON or text) or transport error message
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail if detail is not None else message
        super().__init__(self.message)
