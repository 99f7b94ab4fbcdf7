"""SSE streaming endpoint for live-reload events."""

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from devserver.events.stream import FRAME_SEPARATOR, EventStream

if TYPE_CHECKING:
    from devserver.config import Settings
    from devserver.events.broadcaster import Broadcaster


async def event_stream(request: Request) -> EventSourceResponse:
    """Stream live-reload events via Server-Sent Events.

    Registers the connection as the broadcaster's sink, replacing any
    earlier one, and sends a ``connected`` event straight away. The
    response stays open until the client disconnects.

    Args:
        request: FastAPI request object.

    Returns:
        SSE response stream.
    """
    broadcaster: Broadcaster = request.app.state.broadcaster
    settings: Settings = request.app.state.settings

    stream = EventStream(broadcaster, queue_size=settings.stream_queue_size)
    stream.open()

    return EventSourceResponse(
        stream.frames(),
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
        ping=settings.sse_ping_interval,
        sep=FRAME_SEPARATOR,
    )


def create_router(path: str) -> APIRouter:
    """Build the router carrying the stream endpoint.

    Args:
        path: Endpoint path, e.g. ``/sse``.

    Returns:
        Router with a single GET route.
    """
    router = APIRouter(tags=["events"])
    router.add_api_route(path, event_stream, methods=["GET"])
    return router
