"""In-memory log buffer for the diagnostics endpoints.

A logging handler attached to the root logger keeps the most recent log
records and forwards each new record to event-stream subscribers. Records
may be emitted from worker threads, so delivery to the asyncio queues of
subscribers goes through ``call_soon_threadsafe``.
"""

import asyncio
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Optional

DEFAULT_CAPACITY = 500


class LogBuffer(logging.Handler):
    """Ring buffer of formatted log entries with live subscribers.

    Each entry is a dict ``{"level": ..., "message": ..., "time": ...}``.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, level: int = logging.INFO):
        super().__init__(level=level)
        self.capacity = capacity
        self._entries: deque = deque(maxlen=capacity)
        self._lock = threading.Lock()
        self._subscribers: dict[asyncio.Queue, asyncio.AbstractEventLoop] = {}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "level": record.levelname.lower(),
                "message": record.getMessage(),
                "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            }
        except Exception:
            self.handleError(record)
            return

        with self._lock:
            self._entries.append(entry)
            subscribers = list(self._subscribers.items())

        for queue, loop in subscribers:
            try:
                loop.call_soon_threadsafe(queue.put_nowait, entry)
            except RuntimeError:
                # loop already closed; the stream's finally block unsubscribes it
                pass

    def entries(self) -> list[dict]:
        """Return a snapshot of buffered entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        """Drop all buffered entries."""
        with self._lock:
            self._entries.clear()

    def subscribe(self) -> asyncio.Queue:
        """Register a subscriber queue bound to the running event loop.

        Must be called from within a coroutine.
        """
        queue: asyncio.Queue = asyncio.Queue()
        loop = asyncio.get_running_loop()
        with self._lock:
            self._subscribers[queue] = loop
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        with self._lock:
            self._subscribers.pop(queue, None)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)


_log_buffer: Optional[LogBuffer] = None


def install_log_buffer(capacity: int = DEFAULT_CAPACITY) -> LogBuffer:
    """Attach the process-wide LogBuffer to the root logger (idempotent).

    Args:
        capacity: Maximum number of entries kept

    Returns:
        The installed LogBuffer
    """
    global _log_buffer

    if _log_buffer is None:
        _log_buffer = LogBuffer(capacity=capacity)

    root = logging.getLogger()
    if _log_buffer not in root.handlers:
        root.addHandler(_log_buffer)
    return _log_buffer


def get_log_buffer() -> LogBuffer:
    """Get the process-wide LogBuffer, installing it if needed."""
    return _log_buffer or install_log_buffer()
