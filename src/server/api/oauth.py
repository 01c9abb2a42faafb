"""User-level OAuth endpoints.

Login stores the OAuth app config in the session and redirects to Zoom.
The callback exchanges the code and stores tokens in the session. Meeting
creation then uses those tokens. The callback is reached by a browser
redirect, so its errors are plain text rather than JSON.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from src.oauth.coordinator import OAuthCoordinator
from src.oauth.exceptions import (
    AuthorizationDeniedError,
    MissingOAuthConfigError,
    MissingSessionStateError,
    TokenExchangeError,
    UnauthenticatedError,
)
from src.oauth.session_store import SessionStateStore
from src.server.api.errors import (
    input_error_response,
    provider_error_response,
    provider_error_text,
)
from src.server.dependencies import (
    get_meeting_service,
    get_oauth_coordinator,
    get_session_store,
)
from src.server.models.common import ErrorResponse
from src.server.models.meeting import (
    MeetingResponse,
    OAuthMeetingCreate,
    OAuthStatusResponse,
)
from src.server.services.meeting_service import MeetingService
from src.zoom.exceptions import MeetingCreationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])

OAUTH_FAILURE = "Failed to create meeting via OAuth"
SUCCESS_REDIRECT = "/?oauth=success"


@router.get(
    "/auth/login",
    status_code=status.HTTP_302_FOUND,
    summary="Start the OAuth login",
    description="Stores OAuth app config in the session and redirects to Zoom",
    responses={400: {"model": ErrorResponse}},
)
def login(
    client_id: Optional[str] = Query(default=None),
    client_secret: Optional[str] = Query(default=None),
    redirect_uri: Optional[str] = Query(default=None),
    scope: Optional[str] = Query(default=None),
    store: SessionStateStore = Depends(get_session_store),
    coordinator: OAuthCoordinator = Depends(get_oauth_coordinator),
):
    """Start the Authorization Code flow.

    Every parameter falls back to configuration when omitted.

    Example:
        >>> GET /auth/login?client_id=abc&client_secret=xyz&redirect_uri=http://localhost:3000/auth/callback
        >>> 302 Location: https://zoom.us/oauth/authorize?response_type=code&client_id=abc&...
    """
    try:
        authorize_url = coordinator.begin_login(
            store,
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            scope=scope,
        )
    except MissingOAuthConfigError as e:
        logger.error(f"OAuth: {e}")
        return input_error_response(e)

    return RedirectResponse(authorize_url, status_code=status.HTTP_302_FOUND)


@router.get(
    "/auth/callback",
    status_code=status.HTTP_302_FOUND,
    summary="OAuth redirect target",
    description="Exchanges the authorization code and stores tokens in the session",
    response_class=PlainTextResponse,
)
def callback(
    code: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
    error_description: Optional[str] = Query(default=None),
    store: SessionStateStore = Depends(get_session_store),
    coordinator: OAuthCoordinator = Depends(get_oauth_coordinator),
):
    """Complete the Authorization Code flow.

    Requires the config stored by a prior login from the same session.
    """
    try:
        coordinator.complete_callback(
            store, code, error=error, error_description=error_description
        )
    except AuthorizationDeniedError as e:
        return PlainTextResponse(
            f"OAuth authorization error: {e}", status_code=status.HTTP_400_BAD_REQUEST
        )
    except MissingSessionStateError as e:
        logger.error(f"OAuth: callback rejected: {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except TokenExchangeError as e:
        logger.error(f"OAuth: callback error (status={e.status_code}, details={e.detail})")
        return provider_error_text(e)

    logger.info("OAuth: token acquired; redirecting back to app")
    return RedirectResponse(SUCCESS_REDIRECT, status_code=status.HTTP_302_FOUND)


@router.post(
    "/api/oauth/meetings",
    response_model=MeetingResponse,
    status_code=status.HTTP_200_OK,
    summary="Create a meeting with the session's OAuth tokens",
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_oauth_meeting(
    payload: Optional[OAuthMeetingCreate] = Body(default=None),
    store: SessionStateStore = Depends(get_session_store),
    service: MeetingService = Depends(get_meeting_service),
):
    """Create a meeting as the user who completed the OAuth login.

    Returns 401 when the session holds no tokens. A token that Zoom
    rejects is reported with Zoom's own status instead.
    """
    payload = payload or OAuthMeetingCreate()

    try:
        meeting = service.create_oauth_meeting(store, payload.to_meeting_request())
    except UnauthenticatedError as e:
        logger.error(f"OAuth: {e}")
        return input_error_response(e, status_code=status.HTTP_401_UNAUTHORIZED)
    except MeetingCreationError as e:
        logger.error(
            f"OAuth: error creating meeting (status={e.status_code}, details={e.detail})"
        )
        return provider_error_response(OAUTH_FAILURE, e)

    return MeetingResponse(**meeting.to_dict("oauth"))


@router.get(
    "/api/oauth/status",
    response_model=OAuthStatusResponse,
    response_model_exclude_none=True,
    summary="Session authorization status",
)
def oauth_status(
    store: SessionStateStore = Depends(get_session_store),
    coordinator: OAuthCoordinator = Depends(get_oauth_coordinator),
) -> OAuthStatusResponse:
    """Report whether the calling session is logged in. Tokens are never returned."""
    return OAuthStatusResponse(**coordinator.get_status(store))
