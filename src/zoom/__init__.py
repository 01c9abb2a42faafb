"""
Zoom API client module.

This module provides the Zoom Meetings API integration used once an access
token is held:

- ZoomMeetingsClient: Bearer-authenticated create-meeting call
- Data models: MeetingRequest, MeetingDetails

Tokens are obtained by the OAuth module.
"""

from .client import ZoomMeetingsClient
from .exceptions import MeetingCreationError, ZoomAPIError
from .models import MeetingDetails, MeetingRequest

__all__ = [
    "ZoomMeetingsClient",
    "ZoomAPIError",
    "MeetingCreationError",
    "MeetingDetails",
    "MeetingRequest",
]
