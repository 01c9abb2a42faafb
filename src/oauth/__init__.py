"""
OAuth 2.0 module for Zoom API integration.

This module obtains short-lived Zoom access tokens through two grants:

- Server-to-Server (account_credentials): stateless, one token per request
- Authorization Code (user-level OAuth app): login redirect, callback, and
  session-bound token storage

Public API:
    CredentialSet: Resolved S2S credentials
    ZoomOAuthConfig: OAuth app configuration captured at login
    TokenData: Token payload returned by Zoom
    TokenExchanger: Grant exchanges against the Zoom token endpoint
    SessionStateStore: Per-session storage of config and tokens
    OAuthCoordinator: User-level flow sequencing

Exceptions:
    ZoomOAuthError: Base exception
    MissingCredentialsError: S2S credentials incomplete
    MissingOAuthConfigError: Login config incomplete
    MissingSessionStateError: Callback without login state
    UnauthenticatedError: No tokens in session
    AuthorizationDeniedError: Zoom returned an authorization error
    TokenExchangeError: Token exchange failed
"""

from .config import ZoomOAuthConfig
from .coordinator import OAuthCoordinator
from .credentials import CredentialSet, resolve_s2s_credentials
from .exceptions import (
    AuthorizationDeniedError,
    MissingCredentialsError,
    MissingOAuthConfigError,
    MissingSessionStateError,
    TokenExchangeError,
    UnauthenticatedError,
    ZoomOAuthError,
)
from .session_store import SessionStateStore, TokenData
from .token_exchange import TokenExchanger, build_basic_auth_header

__all__ = [
    # Credentials
    "CredentialSet",
    "resolve_s2s_credentials",
    # Configuration
    "ZoomOAuthConfig",
    # Tokens
    "TokenData",
    "TokenExchanger",
    "build_basic_auth_header",
    # Session state
    "SessionStateStore",
    # Coordinator
    "OAuthCoordinator",
    # Exceptions
    "ZoomOAuthError",
    "MissingCredentialsError",
    "MissingOAuthConfigError",
    "MissingSessionStateError",
    "UnauthenticatedError",
    "AuthorizationDeniedError",
    "TokenExchangeError",
]
