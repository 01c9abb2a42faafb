"""Pydantic request and response models."""

from src.server.models.common import ErrorResponse, HealthResponse, LogEntry, LogsResponse
from src.server.models.meeting import (
    MeetingOptions,
    MeetingResponse,
    OAuthMeetingCreate,
    OAuthStatusResponse,
    S2SMeetingCreate,
)

__all__ = [
    # Common models
    "HealthResponse",
    "ErrorResponse",
    "LogEntry",
    "LogsResponse",
    # Meeting models
    "MeetingOptions",
    "S2SMeetingCreate",
    "OAuthMeetingCreate",
    "MeetingResponse",
    "OAuthStatusResponse",
]
