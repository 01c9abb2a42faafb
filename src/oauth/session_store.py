"""
Session-scoped state for the Zoom user-level OAuth flow.

This module holds the two pieces of state that must survive between
independent HTTP requests from the same client:

- the OAuth app configuration, written at login and read by the callback
- the token payload, written by the callback and read by meeting creation

State lives in the signed session mapping of the request (one per client),
never in process globals. Every put overwrites the previous value of the
same kind unconditionally, so the last write wins.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, MutableMapping, Optional

from .config import ZoomOAuthConfig
from .exceptions import (
    MissingOAuthConfigError,
    MissingSessionStateError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

OAUTH_CONFIG_KEY = "oauth_config"
OAUTH_TOKENS_KEY = "oauth_tokens"

_KNOWN_TOKEN_FIELDS = (
    "access_token",
    "refresh_token",
    "expires_in",
    "token_type",
    "scope",
    "issued_at",
)


@dataclass
class TokenData:
    """
    OAuth token data returned by the Zoom token endpoint.

    Only the fields read by this service are typed. Everything else in the
    provider payload is preserved untouched in ``extra``.

    Attributes:
        access_token: Short-lived bearer token for API calls
        refresh_token: Refresh token (user-level grant only)
        expires_in: Token lifetime in seconds from issue time
        token_type: Token type (typically "bearer")
        scope: Granted OAuth scopes
        issued_at: ISO timestamp of when tokens were issued
        extra: Unrecognized provider fields, passed through as-is
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"
    scope: str = ""
    issued_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    extra: dict = field(default_factory=dict)

    @property
    def expires_at(self) -> Optional[datetime]:
        """
        Calculate expiration datetime.

        Returns:
            Datetime when access token expires (UTC), or None if Zoom sent no expiry
        """
        if self.expires_in is None:
            return None
        issued = datetime.fromisoformat(self.issued_at)
        if issued.tzinfo is None:
            issued = issued.replace(tzinfo=timezone.utc)
        return issued + timedelta(seconds=int(self.expires_in))

    @property
    def is_expired(self) -> bool:
        """True if the expiry has passed. Tokens without an expiry never expire locally."""
        expires_at = self.expires_at
        return expires_at is not None and datetime.now(timezone.utc) >= expires_at

    def to_dict(self, include_extra: bool = True) -> dict:
        """
        Convert to a flat dict.

        Args:
            include_extra: Put unknown provider fields next to the known ones
        """
        data = dict(self.extra) if include_extra else {}
        data.update(
            {
                "access_token": self.access_token,
                "refresh_token": self.refresh_token,
                "expires_in": self.expires_in,
                "token_type": self.token_type,
                "scope": self.scope,
                "issued_at": self.issued_at,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: MutableMapping[str, Any]) -> "TokenData":
        """
        Create TokenData from a token payload or a stored dict.

        Args:
            data: Dict containing at least access_token

        Returns:
            TokenData instance

        Raises:
            KeyError: If access_token is missing or empty
        """
        if not data.get("access_token"):
            raise KeyError("access_token")

        extra = {k: v for k, v in data.items() if k not in _KNOWN_TOKEN_FIELDS}
        kwargs: dict = {
            "access_token": data["access_token"],
            "refresh_token": data.get("refresh_token"),
            "expires_in": data.get("expires_in"),
            "token_type": data.get("token_type") or "bearer",
            "scope": data.get("scope") or "",
            "extra": extra,
        }
        if data.get("issued_at"):
            kwargs["issued_at"] = data["issued_at"]
        return cls(**kwargs)


class SessionStateStore:
    """
    Typed accessor over one client's session mapping.

    The session itself is provided by the HTTP layer (a signed cookie), so
    each request constructs its own store around its own session.
    """

    def __init__(self, session: MutableMapping[str, Any]):
        """
        Initialize session state store.

        Args:
            session: Per-client session mapping (e.g., ``request.session``)
        """
        self.session = session

    def put_oauth_config(self, config: ZoomOAuthConfig) -> None:
        """Store OAuth config, replacing any previous one."""
        self.session[OAUTH_CONFIG_KEY] = config.to_dict()

    def get_oauth_config(self) -> Optional[ZoomOAuthConfig]:
        """
        Load OAuth config from the session.

        Returns:
            ZoomOAuthConfig if stored and valid, None otherwise
        """
        data = self.session.get(OAUTH_CONFIG_KEY)
        if not data:
            return None

        try:
            return ZoomOAuthConfig.from_dict(data)
        except (MissingOAuthConfigError, AttributeError) as e:
            logger.warning(f"Ignoring invalid OAuth config in session: {e}")
            return None

    def require_oauth_config(self) -> ZoomOAuthConfig:
        """
        Load OAuth config or fail.

        Raises:
            MissingSessionStateError: If no config was stored by a login request
        """
        config = self.get_oauth_config()
        if config is None:
            raise MissingSessionStateError("Missing session config or code")
        return config

    def put_token_set(self, tokens: TokenData) -> None:
        """Store the known token fields, replacing any previous tokens."""
        self.session[OAUTH_TOKENS_KEY] = tokens.to_dict(include_extra=False)

    def get_token_set(self) -> Optional[TokenData]:
        """
        Load token data from the session.

        Returns:
            TokenData if an access token is stored, None otherwise
        """
        data = self.session.get(OAUTH_TOKENS_KEY)
        if not data:
            return None

        try:
            return TokenData.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring invalid tokens in session: {e}")
            return None

    def require_token_set(self) -> TokenData:
        """
        Load token data or fail.

        Raises:
            UnauthenticatedError: If no access token is stored
        """
        tokens = self.get_token_set()
        if tokens is None:
            raise UnauthenticatedError("Not authenticated. Start with /auth/login")
        return tokens
