"""Diagnostic log endpoints.

Expose the in-memory log buffer as JSON and as a server-sent event stream.
"""

import asyncio
import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from src.server.log_buffer import LogBuffer, get_log_buffer
from src.server.models.common import LogsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/logs", tags=["logs"])

# Seconds between keep-alive comments on an idle stream
KEEPALIVE_SECONDS = 15.0


def format_event(entry: dict) -> str:
    """Format a log entry as a server-sent event frame."""
    return f"data: {json.dumps(entry)}\n\n"


async def stream_log_events(
    request: Request, buffer: LogBuffer, keepalive: float = KEEPALIVE_SECONDS
) -> AsyncIterator[str]:
    """Yield the buffered entries, then new entries as they are logged.

    Stops when the client disconnects.
    """
    queue = buffer.subscribe()
    try:
        yield ": connected\n\n"
        for entry in buffer.entries():
            yield format_event(entry)

        while True:
            if await request.is_disconnected():
                break
            try:
                entry = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield format_event(entry)
    finally:
        buffer.unsubscribe(queue)


@router.get("", response_model=LogsResponse, summary="Get buffered log entries")
async def get_logs(buffer: LogBuffer = Depends(get_log_buffer)) -> LogsResponse:
    """Return buffered log entries, oldest first."""
    return LogsResponse(logs=buffer.entries())


@router.post("/clear", summary="Clear buffered log entries")
async def clear_logs(buffer: LogBuffer = Depends(get_log_buffer)) -> dict:
    """Empty the log buffer."""
    buffer.clear()
    return {"ok": True}


@router.get("/stream", summary="Stream log entries as server-sent events")
async def stream_logs(request: Request, buffer: LogBuffer = Depends(get_log_buffer)):
    """Stream buffered and live log entries until the client disconnects."""
    return StreamingResponse(
        stream_log_events(request, buffer),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
