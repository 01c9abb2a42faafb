"""API router with all HTTP endpoints.

Combines the Server-to-Server, user-level OAuth, and diagnostics routers
with the health check.
"""

import logging

from fastapi import APIRouter, status

from src.server.api import logs, oauth, s2s
from src.server.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Include sub-routers
router.include_router(s2s.router)
router.include_router(oauth.router)
router.include_router(logs.router)


@router.get(
    "/api/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["health"],
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Example:
        >>> GET /api/health
        >>> {"status": "ok"}
    """
    return HealthResponse(status="ok")
