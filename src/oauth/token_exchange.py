"""
Token exchange against the Zoom OAuth token endpoint.

This module implements the two grants used by the service:
- account_credentials (Server-to-Server apps, one token per request)
- authorization_code (user-level OAuth apps, after the login redirect)

Both authenticate with HTTP Basic built from client_id:client_secret and
share a single POST primitive. Nothing here retries: a failed exchange is
reported immediately.
"""

import logging
from base64 import b64encode
from typing import Any, Optional

import requests

from src.zoom.responses import TIMEOUT_STATUS_CODE, is_success, response_detail

from .config import ZoomOAuthConfig
from .credentials import CredentialSet, mask_identifier
from .exceptions import TokenExchangeError
from .session_store import TokenData

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URL = "https://zoom.us/oauth/token"


def build_basic_auth_header(client_id: str, client_secret: str) -> str:
    """
    Build the HTTP Basic Authorization header value.

    Returns:
        "Basic " followed by base64 of "client_id:client_secret"
    """
    encoded = b64encode(f"{client_id}:{client_secret}".encode()).decode()
    return f"Basic {encoded}"


class TokenExchanger:
    """
    Exchanges OAuth grants for Zoom access tokens.

    The exchanger holds no per-client state, so a single instance can serve
    any number of concurrent requests.
    """

    def __init__(self, token_url: str = DEFAULT_TOKEN_URL, timeout: float = 30):
        """
        Initialize token exchanger.

        Args:
            token_url: Zoom OAuth token endpoint
            timeout: Seconds to wait for Zoom before giving up
        """
        self.token_url = token_url
        self.timeout = timeout

    def exchange_account_credentials(self, credentials: CredentialSet) -> TokenData:
        """
        Obtain an access token with the account_credentials grant.

        Args:
            credentials: Resolved S2S credentials (account_id required)

        Returns:
            TokenData with the access token

        Raises:
            TokenExchangeError: If Zoom rejects the request or cannot be reached
        """
        logger.info(
            f"Requesting S2S token for account {mask_identifier(credentials.account_id)}"
        )
        data = self._post_token_request(
            credentials.client_id,
            credentials.client_secret,
            params={
                "grant_type": "account_credentials",
                "account_id": credentials.account_id,
            },
        )
        token_data = self._parse_token_payload(data)
        logger.info("S2S token acquired")
        return token_data

    def exchange_authorization_code(
        self, config: ZoomOAuthConfig, authorization_code: str
    ) -> TokenData:
        """
        Exchange an authorization code for access and refresh tokens.

        The redirect_uri sent here is the one stored at login time. Zoom
        rejects the exchange if it differs from the registered value.

        Args:
            config: OAuth config stored by the login request
            authorization_code: Code received on the callback

        Returns:
            TokenData with access token, refresh token and expiry

        Raises:
            TokenExchangeError: If Zoom rejects the request or cannot be reached
        """
        logger.info("Exchanging authorization code for tokens")
        data = self._post_token_request(
            config.client_id,
            config.client_secret,
            data={
                "grant_type": "authorization_code",
                "code": authorization_code,
                "redirect_uri": config.redirect_uri,
            },
        )
        token_data = self._parse_token_payload(data)
        logger.info("Successfully obtained user tokens")
        return token_data

    def _post_token_request(
        self,
        client_id: str,
        client_secret: str,
        params: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> dict:
        """
        POST to the token endpoint with Basic auth.

        Args:
            client_id: Zoom app client ID
            client_secret: Zoom app client secret
            params: Query string parameters
            data: Form-encoded body fields

        Returns:
            Parsed JSON token payload

        Raises:
            TokenExchangeError: On non-2xx status, timeout, or network error
        """
        headers = {"Authorization": build_basic_auth_header(client_id, client_secret)}
        if data is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"

        try:
            response = requests.post(
                self.token_url,
                headers=headers,
                params=params,
                data=data,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Token request timed out after {self.timeout}s")
            raise TokenExchangeError(
                f"Token request timed out after {self.timeout}s",
                status_code=TIMEOUT_STATUS_CODE,
            ) from e
        except requests.RequestException as e:
            logger.error(f"Network error during token exchange: {e}")
            raise TokenExchangeError(f"Network error during token exchange: {e}") from e

        if not is_success(response):
            detail = response_detail(response)
            logger.error(f"Token exchange failed: {response.status_code} - {detail}")
            raise TokenExchangeError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid response from token endpoint: {e}")
            raise TokenExchangeError(f"Invalid response from token endpoint: {e}") from e

    @staticmethod
    def _parse_token_payload(data: Any) -> TokenData:
        """Build TokenData from a token payload, failing if it has no access token."""
        try:
            return TokenData.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Token response missing access_token: {e}")
            raise TokenExchangeError(
                "Invalid response from token endpoint: missing access_token"
            ) from e
