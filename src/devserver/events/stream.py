"""Per-connection event stream feeding SSE responses."""

import asyncio
from collections.abc import AsyncIterator

import structlog
from sse_starlette import ServerSentEvent

from devserver.events.broadcaster import Broadcaster

logger = structlog.get_logger()

FRAME_SEPARATOR = "\n"
CONNECTED_EVENT = "connected"
RELOAD_EVENT = "reload"


class StreamClosedError(Exception):
    """Raised when sending to a stream whose client has disconnected."""


class StreamOverflowError(Exception):
    """Raised when a stream's queue of undelivered events is full."""


class EventStream:
    """Push channel for one streaming client.

    ``open`` registers the stream as the broadcaster sink and queues the
    ``connected`` handshake. ``frames`` drains the queue into SSE frames of
    the form ``data: <payload>\\n\\n`` until the client goes away.

    Attributes:
        queue_size: Maximum number of undelivered events.
    """

    def __init__(self, broadcaster: Broadcaster, queue_size: int = 100) -> None:
        """Initialize event stream.

        Args:
            broadcaster: Broadcaster to register with.
            queue_size: Maximum number of undelivered events.
        """
        self._broadcaster = broadcaster
        self.queue_size = queue_size
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self.sink = self.send

    @property
    def closed(self) -> bool:
        """Whether the client side of the stream has gone away."""
        return self._closed

    def send(self, event: str) -> None:
        """Queue an event payload for delivery.

        Args:
            event: Payload string.

        Raises:
            StreamClosedError: If the stream has been closed.
            StreamOverflowError: If the queue is full.
        """
        if self._closed:
            raise StreamClosedError("Event stream is closed")
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull as e:
            raise StreamOverflowError("Event stream queue is full") from e

    def open(self) -> None:
        """Register as the current sink and queue the handshake event."""
        self._broadcaster.set_sink(self.sink)
        logger.info("sse_client_connected")
        self._broadcaster.publish(CONNECTED_EVENT)

    async def frames(self) -> AsyncIterator[ServerSentEvent]:
        """Yield queued events as SSE frames.

        Yields:
            One server-sent event per published payload.
        """
        try:
            while True:
                payload = await self._queue.get()
                yield ServerSentEvent(data=payload, sep=FRAME_SEPARATOR)
        finally:
            self._closed = True
            logger.info("sse_client_disconnected")
