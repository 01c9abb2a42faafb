"""FastAPI dependency providers.

Each request gets its session state wrapped in a SessionStateStore. The
Zoom clients are stateless and built from settings on demand, which lets
tests replace them through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from src.oauth.coordinator import OAuthCoordinator
from src.oauth.session_store import SessionStateStore
from src.oauth.token_exchange import TokenExchanger
from src.server.config import Settings, settings
from src.server.services.meeting_service import MeetingService
from src.zoom.client import ZoomMeetingsClient


def get_settings() -> Settings:
    """Get application settings."""
    return settings


def get_session_store(request: Request) -> SessionStateStore:
    """Wrap the calling client's signed session."""
    return SessionStateStore(request.session)


def get_token_exchanger(config: Settings = Depends(get_settings)) -> TokenExchanger:
    """Build a token exchanger for the configured token endpoint."""
    return TokenExchanger(
        token_url=config.zoom_token_url, timeout=config.http_timeout_seconds
    )


def get_meetings_client(config: Settings = Depends(get_settings)) -> ZoomMeetingsClient:
    """Build a Zoom Meetings API client."""
    return ZoomMeetingsClient(
        base_url=config.zoom_api_base_url, timeout=config.http_timeout_seconds
    )


def get_oauth_coordinator(
    exchanger: TokenExchanger = Depends(get_token_exchanger),
    config: Settings = Depends(get_settings),
) -> OAuthCoordinator:
    """Build the user-level OAuth coordinator."""
    return OAuthCoordinator(
        exchanger,
        authorize_url=config.zoom_authorize_url,
        fallback=config.oauth_fallback(),
    )


def get_meeting_service(
    exchanger: TokenExchanger = Depends(get_token_exchanger),
    meetings_client: ZoomMeetingsClient = Depends(get_meetings_client),
    coordinator: OAuthCoordinator = Depends(get_oauth_coordinator),
    config: Settings = Depends(get_settings),
) -> MeetingService:
    """Build the meeting service."""
    return MeetingService(
        exchanger,
        meetings_client,
        coordinator,
        s2s_fallback=config.s2s_fallback(),
    )
