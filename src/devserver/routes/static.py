"""Static file endpoints with live-reload injection for the index page."""

from typing import TYPE_CHECKING

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import Response

from devserver.content.content_types import content_type_for
from devserver.content.injection import inject_reload_listener
from devserver.content.loader import FileSystemError, read_file
from devserver.content.paths import ContentPathError, resolve_path

if TYPE_CHECKING:
    from devserver.config import Settings

logger = structlog.get_logger()

router = APIRouter(tags=["static"])


@router.get("/")
async def serve_index(request: Request) -> Response:
    """Serve the index document with the reload listener injected.

    Args:
        request: FastAPI request object.

    Returns:
        HTML response, empty when the index file cannot be read.
    """
    settings: Settings = request.app.state.settings

    try:
        path = resolve_path(settings.serve_root, settings.index_file)
        raw = read_file(path)
    except (ContentPathError, FileSystemError) as e:
        logger.error("file_serve_failed", path=e.path, error=str(e))
        return Response(content=b"", media_type="text/html")

    document = raw.decode("utf-8", errors="replace")
    stream_url = settings.sse_path.lstrip("/")
    return Response(
        content=inject_reload_listener(document, stream_url),
        media_type="text/html",
    )


@router.get("/{file_path:path}")
async def serve_file(request: Request, file_path: str) -> Response:
    """Serve a file from the serve root.

    A file that cannot be resolved or read yields an empty 200 response
    rather than an error status.

    Args:
        request: FastAPI request object.
        file_path: Path relative to the serve root.

    Returns:
        File contents with a content type derived from the extension.
    """
    settings: Settings = request.app.state.settings
    logger.info("serve_file", path=f"/{file_path}")

    try:
        path = resolve_path(settings.serve_root, file_path)
        content = read_file(path)
    except (ContentPathError, FileSystemError) as e:
        logger.error("file_serve_failed", path=e.path, error=str(e))
        return Response(content=b"")

    return Response(content=content, media_type=content_type_for(file_path))
