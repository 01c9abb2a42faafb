"""
Zoom meeting data models.

These models cover only the fields this service sends and reads. Unknown
fields in Zoom responses are ignored.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

# Zoom meeting type for a scheduled meeting
SCHEDULED_MEETING = 2


def normalize_start_time(value: Optional[str]) -> Optional[str]:
    """
    Check a meeting start time and strip surrounding whitespace.

    Args:
        value: ISO-8601 datetime, a trailing "Z" allowed

    Returns:
        The stripped value, or None when empty

    Raises:
        ValueError: If the value is not an ISO-8601 datetime
    """
    if value is None or not value.strip():
        return None
    value = value.strip()
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError("start_time must be an ISO-8601 datetime") from e
    return value


@dataclass
class MeetingRequest:
    """
    Parameters for creating a scheduled Zoom meeting.

    Attributes:
        topic: Meeting topic
        duration: Meeting length in minutes
        start_time: Optional ISO-8601 start time, passed through to Zoom
        timezone: Optional IANA timezone name
    """

    topic: str = "Test Meeting"
    duration: int = 30
    start_time: Optional[str] = None
    timezone: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """
        Build the JSON body for the create-meeting call.

        Security settings are fixed: join before host is disabled and the
        waiting room is enabled. Unset optional fields are omitted.
        """
        payload: Dict[str, Any] = {
            "topic": self.topic,
            "type": SCHEDULED_MEETING,
            "duration": self.duration,
            "settings": {
                "join_before_host": False,
                "waiting_room": True,
            },
        }
        if self.start_time:
            payload["start_time"] = self.start_time
        if self.timezone:
            payload["timezone"] = self.timezone
        return payload


@dataclass
class MeetingDetails:
    """
    A created Zoom meeting.

    Attributes:
        meeting_id: Zoom meeting ID
        password: Meeting passcode (may be absent)
        start_url: Host link that starts the meeting
        join_url: Participant join link
    """

    meeting_id: Any
    password: Optional[str] = None
    start_url: Optional[str] = None
    join_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "MeetingDetails":
        """
        Create MeetingDetails from a Zoom create-meeting response.

        Args:
            data: Parsed JSON response

        Returns:
            MeetingDetails instance
        """
        return cls(
            meeting_id=data.get("id"),
            password=data.get("password"),
            start_url=data.get("start_url"),
            join_url=data.get("join_url"),
        )

    def to_dict(self, method: str) -> Dict[str, Any]:
        """
        Convert to the response shape returned to callers.

        Args:
            method: Which grant produced the token ("s2s" or "oauth")
        """
        return {
            "method": method,
            "meeting_id": self.meeting_id,
            "password": self.password,
            "host_link": self.start_url,
            "join_link": self.join_url,
        }
