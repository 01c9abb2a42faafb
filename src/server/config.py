"""Configuration management for the FastAPI server.

This module loads configuration from environment variables and an optional
.env file. Zoom credentials configured here are fallbacks: values supplied
with a request always take precedence.
"""

import logging
from typing import Optional

from pydantic_settings import BaseSettings

from src.oauth.config import DEFAULT_SCOPE
from src.oauth.coordinator import DEFAULT_AUTHORIZE_URL
from src.oauth.token_exchange import DEFAULT_TOKEN_URL
from src.zoom.endpoints import API_BASE_URL

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application configuration settings.

    Attributes:
        app_name: Application name
        version: Application version
        debug: Debug mode flag
        zoom_s2s_client_id: Fallback Server-to-Server client ID
        zoom_s2s_client_secret: Fallback Server-to-Server client secret
        zoom_s2s_account_id: Fallback Server-to-Server account ID
        zoom_oauth_client_id: Fallback OAuth app client ID
        zoom_oauth_client_secret: Fallback OAuth app client secret
        zoom_oauth_redirect_uri: Fallback OAuth redirect URI
        zoom_oauth_scope: Fallback OAuth scope
        zoom_authorize_url: Zoom OAuth authorize endpoint
        zoom_token_url: Zoom OAuth token endpoint
        zoom_api_base_url: Zoom REST API base URL
        http_timeout_seconds: Timeout for every outbound Zoom call
        session_secret: Key used to sign the session cookie
        session_cookie: Session cookie name
        session_https_only: Only send the session cookie over HTTPS
        log_buffer_size: Number of log entries kept for /api/logs
        cors_origins: List of allowed CORS origins
        host: Server host address
        port: Server port number
    """

    app_name: str = "Zoom Meeting Links API"
    version: str = "1.0.0"
    debug: bool = False

    # Server-to-Server OAuth app (account_credentials grant)
    zoom_s2s_client_id: Optional[str] = None
    zoom_s2s_client_secret: Optional[str] = None
    zoom_s2s_account_id: Optional[str] = None

    # User-level OAuth app (authorization_code grant)
    zoom_oauth_client_id: Optional[str] = None
    zoom_oauth_client_secret: Optional[str] = None
    zoom_oauth_redirect_uri: Optional[str] = None
    zoom_oauth_scope: str = DEFAULT_SCOPE

    # Zoom endpoints
    zoom_authorize_url: str = DEFAULT_AUTHORIZE_URL
    zoom_token_url: str = DEFAULT_TOKEN_URL
    zoom_api_base_url: str = API_BASE_URL
    http_timeout_seconds: float = 30.0

    # Signed cookie session
    session_secret: str = "dev_secret_change_me"
    session_cookie: str = "session"
    session_https_only: bool = False

    log_buffer_size: int = 500

    # CORS configuration - allow local development origins
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 3000

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def s2s_fallback(self) -> dict:
        """Get configured S2S credentials keyed like a credential request.

        Returns:
            Dict with client_id, client_secret and account_id (values may be None)
        """
        return {
            "client_id": self.zoom_s2s_client_id,
            "client_secret": self.zoom_s2s_client_secret,
            "account_id": self.zoom_s2s_account_id,
        }

    def oauth_fallback(self) -> dict:
        """Get configured OAuth app values keyed like a login request.

        Returns:
            Dict with client_id, client_secret, redirect_uri and scope
        """
        return {
            "client_id": self.zoom_oauth_client_id,
            "client_secret": self.zoom_oauth_client_secret,
            "redirect_uri": self.zoom_oauth_redirect_uri,
            "scope": self.zoom_oauth_scope,
        }


# Global settings instance
settings = Settings()
