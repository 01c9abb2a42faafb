"""
OAuth coordinator for the Zoom user-level (Authorization Code) flow.

The flow spans three independent requests from the same client:

1. login     - resolve app config, store it in the session, redirect to Zoom
2. callback  - read config from the session, exchange the code, store tokens
3. meeting   - read tokens from the session and call the Zoom API

Session states are Unauthenticated (nothing stored), ConfigStored (config
only) and Authenticated (tokens stored). A new login overwrites the stored
config but leaves previously stored tokens in place until a new callback
succeeds.
"""

import logging
from typing import Mapping, Optional

from .config import ZoomOAuthConfig
from .credentials import mask_identifier
from .exceptions import AuthorizationDeniedError, MissingSessionStateError
from .session_store import SessionStateStore, TokenData
from .token_exchange import TokenExchanger

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZE_URL = "https://zoom.us/oauth/authorize"


class OAuthCoordinator:
    """
    High-level coordinator for the user-level OAuth flow.

    The coordinator holds no session state itself. Every method receives
    the calling client's SessionStateStore explicitly.

    Example:
        coordinator = OAuthCoordinator(TokenExchanger(), fallback=settings.oauth_fallback())
        url = coordinator.begin_login(store, client_id="abc", client_secret="xyz",
                                      redirect_uri="http://localhost:3000/auth/callback")
        # ... user authorizes, Zoom redirects back with ?code=...
        coordinator.complete_callback(store, code)
        token = coordinator.get_access_token(store)
    """

    def __init__(
        self,
        exchanger: TokenExchanger,
        authorize_url: str = DEFAULT_AUTHORIZE_URL,
        fallback: Optional[Mapping[str, Optional[str]]] = None,
    ):
        """
        Initialize OAuth coordinator.

        Args:
            exchanger: Token exchanger used by the callback
            authorize_url: Zoom authorize endpoint
            fallback: Configured client_id, client_secret, redirect_uri and scope
                      used when the login request omits them
        """
        self.exchanger = exchanger
        self.authorize_url = authorize_url
        self.fallback = dict(fallback or {})

    def begin_login(
        self,
        store: SessionStateStore,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> str:
        """
        Store OAuth config in the session and build the authorize URL.

        Args:
            store: Session state of the calling client
            client_id: Client ID from the request (falls back to configuration)
            client_secret: Client secret from the request
            redirect_uri: Redirect URI from the request
            scope: Scope from the request

        Returns:
            Zoom authorize URL to redirect the user to

        Raises:
            MissingOAuthConfigError: If config is incomplete; the session is untouched
        """
        config = ZoomOAuthConfig.resolve(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=scope,
            fallback=self.fallback,
        )
        store.put_oauth_config(config)

        logger.info(
            f"Redirecting to authorize (client_id={mask_identifier(config.client_id)}, "
            f"redirect_uri={config.redirect_uri})"
        )
        return config.authorization_url(self.authorize_url)

    def complete_callback(
        self,
        store: SessionStateStore,
        code: Optional[str],
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ) -> TokenData:
        """
        Exchange the callback code and store the resulting tokens.

        Args:
            store: Session state of the calling client
            code: Authorization code from the callback query
            error: Error code Zoom sent instead of a code, if any
            error_description: Human-readable error from Zoom, if any

        Returns:
            TokenData now stored in the session

        Raises:
            AuthorizationDeniedError: If Zoom redirected back with an error
            MissingSessionStateError: If no login config is stored or code is missing
            TokenExchangeError: If Zoom rejects the code exchange
        """
        if error:
            logger.error(f"OAuth authorization error: {error} - {error_description or ''}")
            raise AuthorizationDeniedError(error, error_description or "")

        config = store.require_oauth_config()
        if not code:
            raise MissingSessionStateError("Missing session config or code")

        tokens = self.exchanger.exchange_authorization_code(config, code)
        store.put_token_set(tokens)
        logger.info("OAuth tokens stored in session")
        return tokens

    def get_access_token(self, store: SessionStateStore) -> str:
        """
        Get the access token stored for this session.

        Raises:
            UnauthenticatedError: If the session holds no tokens
        """
        return store.require_token_set().access_token

    def get_status(self, store: SessionStateStore) -> dict:
        """
        Get authorization status of the session for diagnostics.

        Token values are never included.

        Returns:
            Dictionary with:
            - authenticated: bool
            - config_stored: bool
            - scope: str (if authenticated)
            - expires_at: ISO timestamp or None (if authenticated)
            - expired: bool (if authenticated)
        """
        tokens = store.get_token_set()
        status = {
            "authenticated": tokens is not None,
            "config_stored": store.get_oauth_config() is not None,
        }
        if tokens is not None:
            expires_at = tokens.expires_at
            status.update(
                {
                    "scope": tokens.scope,
                    "expires_at": expires_at.isoformat() if expires_at else None,
                    "expired": tokens.is_expired,
                }
            )
        return status
