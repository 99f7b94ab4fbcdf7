"""Entry point for the dev server."""

import asyncio
import contextlib
import sys

import structlog
import uvicorn

from devserver.app import create_app
from devserver.config import Settings
from devserver.logging import configure_logging

logger = structlog.get_logger()


async def serve(settings: Settings) -> None:
    """Run uvicorn until interrupted.

    Uvicorn installs its own SIGINT/SIGTERM handlers and exits the process
    when the port cannot be bound.

    Args:
        settings: Server configuration.
    """
    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "warning",
        access_log=False,
    )
    server = uvicorn.Server(config)

    logger.info(
        "server_listening",
        url=f"http://localhost:{settings.port}",
        serve_dir=str(settings.serve_root),
        watch=settings.watch,
    )
    await server.serve()


def main() -> None:
    """Entry point for python -m devserver."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.json_logs)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve(settings))

    sys.exit(0)


if __name__ == "__main__":
    main()
