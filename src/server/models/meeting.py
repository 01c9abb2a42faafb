"""Pydantic models for meeting creation requests and responses.

This module contains the request bodies for both meeting endpoints and the
shared response schema returned after a meeting is created.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.zoom.models import MeetingRequest, normalize_start_time


class MeetingOptions(BaseModel):
    """Meeting parameters accepted by both meeting endpoints.

    Attributes:
        topic: Meeting topic
        duration: Meeting length in minutes
        start_time: Optional ISO-8601 start time
        timezone: Optional IANA timezone name

    Example:
        >>> MeetingOptions(topic="Weekly sync", duration=45,
        >>>                start_time="2026-11-02T15:00:00Z", timezone="UTC")
    """

    topic: str = Field(default="Test Meeting", description="Meeting topic")
    duration: int = Field(default=30, gt=0, description="Meeting length in minutes")
    start_time: Optional[str] = Field(
        default=None, description="Start time (ISO-8601), omitted for Zoom's default"
    )
    timezone: Optional[str] = Field(default=None, description="IANA timezone name")

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: Optional[str]) -> Optional[str]:
        """Validate start time is ISO-8601.

        Raises:
            ValueError: If the value is not an ISO-8601 datetime
        """
        return normalize_start_time(v)

    def to_meeting_request(self) -> MeetingRequest:
        """Convert to the Zoom client's request model."""
        return MeetingRequest(
            topic=self.topic,
            duration=self.duration,
            start_time=self.start_time,
            timezone=self.timezone,
        )


class S2SMeetingCreate(MeetingOptions):
    """Request body for creating a meeting with Server-to-Server credentials.

    Credentials are optional; missing ones fall back to configuration.

    Attributes:
        client_id: S2S app client ID (JSON key: clientId)
        client_secret: S2S app client secret (JSON key: clientSecret)
        account_id: Zoom account ID (JSON key: accountId)
    """

    model_config = ConfigDict(populate_by_name=True)

    client_id: Optional[str] = Field(default=None, alias="clientId")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    account_id: Optional[str] = Field(default=None, alias="accountId")

    def credential_fields(self) -> dict:
        """Get request-supplied credentials keyed for the credential resolver."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "account_id": self.account_id,
        }


class OAuthMeetingCreate(MeetingOptions):
    """Request body for creating a meeting with the session's OAuth tokens."""

    pass


class MeetingResponse(BaseModel):
    """Response schema for a created meeting.

    Attributes:
        method: Grant that produced the token ("s2s" or "oauth")
        meeting_id: Zoom meeting ID
        password: Meeting passcode
        host_link: Link that starts the meeting as host
        join_link: Participant join link
    """

    method: Literal["s2s", "oauth"] = Field(..., description="Grant used")
    meeting_id: Any = Field(..., description="Zoom meeting ID")
    password: Optional[str] = Field(default=None, description="Meeting passcode")
    host_link: Optional[str] = Field(default=None, description="Host start URL")
    join_link: Optional[str] = Field(default=None, description="Participant join URL")


class OAuthStatusResponse(BaseModel):
    """Authorization status of the calling session (never includes tokens)."""

    authenticated: bool = Field(..., description="Whether the session holds tokens")
    config_stored: bool = Field(..., description="Whether login config is stored")
    scope: Optional[str] = Field(default=None, description="Granted scopes")
    expires_at: Optional[str] = Field(default=None, description="Access token expiry")
    expired: Optional[bool] = Field(default=None, description="Whether expiry has passed")
