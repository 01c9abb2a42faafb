"""Conversion of flow errors into HTTP responses."""

import json
from typing import Union

from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.oauth.exceptions import TokenExchangeError
from src.zoom.exceptions import ZoomAPIError

ProviderError = Union[TokenExchangeError, ZoomAPIError]


def input_error_response(exc: Exception, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """JSON response for incomplete input or missing session state.

    Args:
        exc: Error whose message is shown to the caller
        status_code: HTTP status (400 unless the caller is unauthenticated)
    """
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def provider_error_response(summary: str, exc: ProviderError) -> JSONResponse:
    """JSON response for a Zoom-side failure.

    Zoom's status code and body are passed through. Transport failures
    without a status become 500 with the error message as details.

    Args:
        summary: Error summary for the caller
        exc: Token exchange or API error
    """
    return JSONResponse(
        status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": summary, "details": exc.detail},
    )


def provider_error_text(exc: ProviderError) -> PlainTextResponse:
    """Plain-text response for a Zoom-side failure on a browser-facing route."""
    try:
        body = json.dumps(exc.detail)
    except (TypeError, ValueError):
        body = str(exc.detail)
    return PlainTextResponse(
        f"OAuth callback error: {body}",
        status_code=exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
