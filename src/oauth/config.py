"""
OAuth app configuration for the Zoom user-level (Authorization Code) flow.

A ZoomOAuthConfig is created at login time from query parameters with
fallback to environment configuration, stored in the client session, and
consumed by the callback to exchange the authorization code.
"""

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from .credentials import first_present
from .exceptions import MissingOAuthConfigError

DEFAULT_SCOPE = "meeting:write"


@dataclass
class ZoomOAuthConfig:
    """
    Configuration for one Zoom OAuth app login.

    The redirect_uri must match the value registered with the Zoom app
    exactly. It is not validated here; Zoom rejects a mismatch during
    the token exchange.

    Attributes:
        client_id: Zoom OAuth app client ID
        client_secret: Zoom OAuth app client secret
        redirect_uri: Callback URL registered with the Zoom app
        scope: Requested OAuth scopes (default: meeting:write)
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: str = DEFAULT_SCOPE

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id or not self.client_secret or not self.redirect_uri:
            raise MissingOAuthConfigError(
                "Missing OAuth config (client_id, client_secret, redirect_uri)."
            )

        if not self.scope:
            self.scope = DEFAULT_SCOPE

    def authorization_url(self, authorize_endpoint: str) -> str:
        """
        Build the Zoom authorize URL the user is redirected to.

        Args:
            authorize_endpoint: Zoom authorize endpoint (e.g., https://zoom.us/oauth/authorize)

        Returns:
            Complete authorize URL with response_type, client_id, redirect_uri and scope
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
        }
        return f"{authorize_endpoint}?{urlencode(params)}"

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict for session storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ZoomOAuthConfig":
        """
        Create config from a stored dict.

        Raises:
            MissingOAuthConfigError: If the stored dict is incomplete
        """
        return cls(
            client_id=data.get("client_id", ""),
            client_secret=data.get("client_secret", ""),
            redirect_uri=data.get("redirect_uri", ""),
            scope=data.get("scope", DEFAULT_SCOPE),
        )

    @classmethod
    def resolve(
        cls,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        scope: Optional[str] = None,
        fallback: Optional[Mapping[str, Optional[str]]] = None,
    ) -> "ZoomOAuthConfig":
        """
        Resolve login configuration from request values and fallback values.

        Each request value that is present and non-empty overrides the
        corresponding fallback value.

        Args:
            client_id: Client ID from the login request
            client_secret: Client secret from the login request
            redirect_uri: Redirect URI from the login request
            scope: Scope from the login request
            fallback: Dict with the same keys from configuration

        Returns:
            ZoomOAuthConfig instance

        Raises:
            MissingOAuthConfigError: If client_id, client_secret or redirect_uri
                                     are still empty after merging
        """
        fallback = fallback or {}
        return cls(
            client_id=first_present(client_id, fallback.get("client_id")),
            client_secret=first_present(client_secret, fallback.get("client_secret")),
            redirect_uri=first_present(redirect_uri, fallback.get("redirect_uri")),
            scope=first_present(scope, fallback.get("scope"), DEFAULT_SCOPE),
        )
