"""
Zoom Meetings API client.

This module issues the create-meeting call with a bearer token obtained by
either grant. Meeting creation is not idempotent, so failures are reported
as-is and never retried.
"""

import logging
from typing import Optional
from urllib.parse import urljoin

import requests

from . import endpoints
from .exceptions import MeetingCreationError
from .models import MeetingDetails, MeetingRequest
from .responses import TIMEOUT_STATUS_CODE, is_success, response_detail

logger = logging.getLogger(__name__)


class ZoomMeetingsClient:
    """
    HTTP client for the Zoom Meetings API.

    The client holds no tokens; every call receives the bearer token of
    the flow that is creating the meeting.

    Example:
        client = ZoomMeetingsClient()
        meeting = client.create_meeting(access_token, MeetingRequest(topic="Standup"))
        print(meeting.join_url)
    """

    def __init__(self, base_url: str = endpoints.API_BASE_URL, timeout: float = 30):
        """
        Initialize Zoom Meetings client.

        Args:
            base_url: Zoom REST API base URL
            timeout: Seconds to wait for Zoom before giving up
        """
        self.base_url = base_url
        self.timeout = timeout

    def _get_full_url(self, endpoint: str) -> str:
        """Construct full API URL from endpoint path."""
        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"
        return urljoin(self.base_url, endpoint)

    def create_meeting(
        self,
        access_token: str,
        meeting: Optional[MeetingRequest] = None,
        user_id: str = "me",
    ) -> MeetingDetails:
        """
        Create a scheduled meeting for the token's user.

        Args:
            access_token: Bearer token from either grant
            meeting: Meeting parameters (defaults apply when omitted)
            user_id: Zoom user to create the meeting for (default: token owner)

        Returns:
            MeetingDetails with id, password, host link and join link

        Raises:
            MeetingCreationError: On non-2xx status, timeout, or network error
        """
        meeting = meeting or MeetingRequest()
        url = self._get_full_url(endpoints.USER_MEETINGS.format(userId=user_id))

        logger.info(
            f"Creating meeting (topic={meeting.topic!r}, duration={meeting.duration}, "
            f"timezone={meeting.timezone or 'default'})"
        )

        try:
            response = requests.post(
                url,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
                json=meeting.to_payload(),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Create meeting timed out after {self.timeout}s")
            raise MeetingCreationError(
                f"Create meeting timed out after {self.timeout}s",
                status_code=TIMEOUT_STATUS_CODE,
            ) from e
        except requests.RequestException as e:
            logger.error(f"Network error creating meeting: {e}")
            raise MeetingCreationError(f"Network error creating meeting: {e}") from e

        if not is_success(response):
            detail = response_detail(response)
            logger.error(f"Create meeting failed ({response.status_code}): {detail}")
            raise MeetingCreationError(
                f"Zoom API error ({response.status_code})",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MeetingCreationError(f"Invalid response from Zoom API: {e}") from e

        details = MeetingDetails.from_api_response(data)
        logger.info(f"Meeting created (id={details.meeting_id}, join_url={details.join_url})")
        return details
