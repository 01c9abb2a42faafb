"""FastAPI application entry point.

This module initializes the FastAPI application with middleware,
routers, and core endpoints.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from src.server import __version__
from src.server.api.router import router as api_router
from src.server.config import settings
from src.server.log_buffer import install_log_buffer

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
install_log_buffer(settings.log_buffer_size)
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Creates Zoom meetings using Server-to-Server or user-level OAuth",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Signed cookie session holding OAuth config and tokens between requests
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie,
    same_site="lax",
    https_only=settings.session_https_only,
)

# Configure CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],  # Allow all HTTP methods
    allow_headers=["*"],  # Allow all headers
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log API and auth requests."""
    path = request.url.path
    if path.startswith("/api") or path.startswith("/auth"):
        logger.info(f"HTTP {request.method} {path}")
    return await call_next(request)


# Include API routers
app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Application startup event handler."""
    logger.info(f"Starting {settings.app_name} v{__version__}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(
        f"S2S fallback credentials: "
        f"{'set' if settings.zoom_s2s_client_id and settings.zoom_s2s_account_id else 'NOT SET'}"
    )
    logger.info(
        f"OAuth fallback redirect URI: {settings.zoom_oauth_redirect_uri or 'NOT SET'}"
    )
    if settings.session_secret == "dev_secret_change_me":
        logger.warning("SESSION_SECRET is not set; using the development default")


@app.get(
    "/",
    status_code=status.HTTP_200_OK,
    tags=["root"],
    summary="Root endpoint",
    description="Returns welcome message with API information",
)
async def root(oauth: Optional[str] = None):
    """Root endpoint.

    Also the redirect target after a successful OAuth callback
    (``/?oauth=success``).

    Returns:
        Welcome message with API details
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": __version__,
        "oauth": oauth,
        "docs": "/docs",
        "health": "/api/health",
        "s2s_meetings": "/api/s2s/meetings",
        "oauth_login": "/auth/login",
        "oauth_meetings": "/api/oauth/meetings",
    }


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors.

    Args:
        request: The request that caused the error
        exc: The exception that was raised

    Returns:
        JSON error response
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "An unexpected error occurred",
            "details": str(exc) if settings.debug else None,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
