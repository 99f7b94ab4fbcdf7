"""Dev server configuration loaded from environment variables."""
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dev server configuration loaded from environment variables.

    Variable names carry no prefix so ``PORT=8080 WATCH=./build`` works.

    Attributes:
        host: Bind address for the HTTP server.
        port: Port number for the HTTP server.
        watch: Directory to watch for changes. No watcher runs when unset.
        serve_dir: Directory static files are served from.
        index_file: Document served for ``/`` with the reload script injected.
        debounce_ms: Quiet period before a batch of changes is dispatched.
        sse_path: Path of the event stream endpoint.
        sse_ping_interval: Seconds between keep-alive comments on the stream.
        stream_queue_size: Maximum undelivered events per stream.
        debug: Enable debug-level logging.
        json_logs: Render logs as JSON instead of console lines.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000
    watch: str | None = None
    serve_dir: str = "."
    index_file: str = "index.html"

    debounce_ms: int = 100
    sse_path: str = "/sse"
    sse_ping_interval: int = 15
    stream_queue_size: int = 100

    debug: bool = False
    json_logs: bool = False

    @computed_field
    @property
    def watch_path(self) -> Path | None:
        """Directory to watch, or None when watching is disabled.

        Returns:
            Watch root path as given, without resolving it.
        """
        if not self.watch or not self.watch.strip():
            return None
        return Path(self.watch.strip())

    @computed_field
    @property
    def serve_root(self) -> Path:
        """Absolute directory static files are served from.

        Returns:
            Resolved serve directory.
        """
        return Path(self.serve_dir).resolve()
