"""Server-to-Server meeting endpoint.

Each request is self-contained: credentials are resolved, a token is
obtained, and the meeting is created, all within the request.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.oauth.exceptions import MissingCredentialsError, TokenExchangeError
from src.server.api.errors import input_error_response, provider_error_response
from src.server.dependencies import get_meeting_service
from src.server.models.common import ErrorResponse
from src.server.models.meeting import MeetingResponse, S2SMeetingCreate
from src.server.services.meeting_service import MeetingService
from src.zoom.exceptions import MeetingCreationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/s2s", tags=["s2s"])

S2S_FAILURE = "Failed to create meeting via S2S"


@router.post(
    "/meetings",
    response_model=MeetingResponse,
    status_code=status.HTTP_200_OK,
    summary="Create a meeting with Server-to-Server OAuth",
    description="Obtains an account_credentials token and creates a scheduled meeting",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_s2s_meeting(
    payload: Optional[S2SMeetingCreate] = Body(default=None),
    service: MeetingService = Depends(get_meeting_service),
):
    """Create a meeting using Server-to-Server credentials.

    Args:
        payload: Optional credentials and meeting parameters
        service: Meeting service

    Returns:
        Created meeting links, or an error response

    Example:
        >>> POST /api/s2s/meetings
        >>> {
        >>>     "clientId": "abc",
        >>>     "clientSecret": "xyz",
        >>>     "accountId": "acct123",
        >>>     "topic": "Standup",
        >>>     "duration": 15
        >>> }
    """
    payload = payload or S2SMeetingCreate()

    try:
        meeting = service.create_s2s_meeting(
            payload.credential_fields(), payload.to_meeting_request()
        )
    except MissingCredentialsError as e:
        logger.error(f"S2S: {e}")
        return input_error_response(e)
    except (TokenExchangeError, MeetingCreationError) as e:
        logger.error(
            f"S2S: error creating meeting (status={e.status_code}, details={e.detail})"
        )
        return provider_error_response(S2S_FAILURE, e)

    return MeetingResponse(**meeting.to_dict("s2s"))
