"""Common Pydantic models for API requests and responses.

This module contains shared response models used across the API.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service health status
    """

    status: str = Field(default="ok", description="Service health status")


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Human-readable error summary
        details: Provider error body or underlying error message
    """

    error: str = Field(..., description="Error summary")
    details: Optional[Any] = Field(
        default=None, description="Provider error body or transport error message"
    )


class LogEntry(BaseModel):
    """A buffered log entry."""

    level: str
    message: str
    time: str


class LogsResponse(BaseModel):
    """Buffered log entries, oldest first."""

    logs: list[LogEntry] = Field(default_factory=list)
