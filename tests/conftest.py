"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient
from sse_starlette.sse import AppStatus

from devserver.app import create_app
from devserver.config import Settings


@pytest.fixture(autouse=True)
def reset_sse_app_status() -> None:
    """Drop sse-starlette's exit event so each test loop gets its own."""
    AppStatus.should_exit_event = None


@pytest.fixture
def serve_dir(tmp_path: Path) -> Path:
    """Create a serve directory with an index page and a few assets."""
    root = tmp_path / "site"
    root.mkdir()
    (root / "index.html").write_text(
        "<html><head></head><body><h1>Hello</h1></body></html>",
        encoding="utf-8",
    )
    (root / "style.css").write_text("body { color: red; }", encoding="utf-8")
    (root / "page.html").write_text("<p>page</p>", encoding="utf-8")
    (root / "app.js").write_text("console.log('hi');", encoding="utf-8")
    (root / "data.json").write_text('{"a": 1}', encoding="utf-8")
    (root / "notes.md").write_text("# notes", encoding="utf-8")
    return root


@pytest.fixture
def settings(serve_dir: Path) -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=3000,
        serve_dir=str(serve_dir),
        watch=None,
        debug=True,
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Create test client with configured app."""
    app = create_app(settings)
    return TestClient(app)
