"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from devserver.config import Settings
from devserver.events import Broadcaster, DirectoryWatcher
from devserver.events.stream import RELOAD_EVENT
from devserver.middleware.logging import RequestLoggingMiddleware
from devserver.routes import events, static

logger = structlog.get_logger()


def make_reload_handler(broadcaster: Broadcaster) -> Callable[[set[str]], None]:
    """Build the batch callback that turns file changes into a reload.

    The callback logs the batch, publishes ``reload`` and clears the set
    it was handed so the next batch starts empty.

    Args:
        broadcaster: Broadcaster the reload event goes through.

    Returns:
        Callback suitable for ``DirectoryWatcher``.
    """

    def on_batch(changed_files: set[str]) -> None:
        logger.info("files_changed", files=sorted(changed_files))
        broadcaster.publish(RELOAD_EVENT)
        changed_files.clear()

    return on_batch


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Starts the directory watcher when a watch root is configured and stops
    it on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    broadcaster: Broadcaster = app.state.broadcaster
    logger.info("server_startup", url=f"http://{settings.host}:{settings.port}")

    watcher: DirectoryWatcher | None = None
    if settings.watch_path is not None:
        watcher = DirectoryWatcher(
            settings.watch_path,
            on_batch=make_reload_handler(broadcaster),
            debounce_ms=settings.debounce_ms,
        )
        await watcher.start()
    app.state.watcher = watcher

    try:
        yield
    finally:
        if watcher is not None:
            watcher.stop()
        logger.info(
            "server_shutdown",
            delivered_events=broadcaster.delivered_events,
            failed_deliveries=broadcaster.failed_deliveries,
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create the configured dev server application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Live-reload dev server",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.broadcaster = Broadcaster()
    app.state.watcher = None

    app.add_middleware(RequestLoggingMiddleware, excluded_paths=[settings.sse_path])

    app.include_router(events.create_router(settings.sse_path))
    app.include_router(static.router)

    return app
