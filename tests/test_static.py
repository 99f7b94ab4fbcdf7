"""Static file endpoint tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from devserver.app import create_app
from devserver.config import Settings
from devserver.content.content_types import content_type_for
from devserver.content.injection import inject_reload_listener
from devserver.content.paths import ContentPathError, resolve_path


def media_type(response) -> str:
    return response.headers["content-type"].split(";")[0].strip()


def test_index_has_reload_listener_after_body(client: TestClient) -> None:
    """The index page carries the listener right after the body tag."""
    response = client.get("/")

    assert response.status_code == 200
    assert media_type(response) == "text/html"
    body = response.text
    assert body.count("<body>") == 1
    after_body = body.split("<body>", 1)[1]
    assert after_body.lstrip().startswith("<script>")
    assert "new EventSource('sse')" in after_body
    assert "<h1>Hello</h1>" in after_body


def test_index_missing_yields_empty_body(tmp_path: Path) -> None:
    """A missing index file is served as an empty document."""
    app = create_app(Settings(serve_dir=str(tmp_path), watch=None))
    response = TestClient(app).get("/")

    assert response.status_code == 200
    assert response.content == b""


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/style.css", "text/css"),
        ("/page.html", "text/html"),
        ("/app.js", "application/javascript"),
        ("/data.json", "application/json"),
        ("/notes.md", "text/plain"),
    ],
)
def test_content_type_by_extension(client: TestClient, path: str, expected: str) -> None:
    """Files are served with the content type for their extension."""
    response = client.get(path)

    assert response.status_code == 200
    assert media_type(response) == expected
    assert response.content


def test_file_served_verbatim(client: TestClient, serve_dir: Path) -> None:
    """Non-index HTML files are not rewritten."""
    response = client.get("/page.html")
    assert response.content == (serve_dir / "page.html").read_bytes()


def test_missing_file_yields_empty_body(client: TestClient) -> None:
    """A nonexistent file gives an empty 200 response."""
    response = client.get("/does/not/exist.js")

    assert response.status_code == 200
    assert response.content == b""

    # server keeps working afterwards
    assert client.get("/style.css").status_code == 200


def test_directory_request_yields_empty_body(client: TestClient, serve_dir: Path) -> None:
    """Requesting a directory is treated like an unreadable file."""
    (serve_dir / "assets").mkdir()
    response = client.get("/assets")

    assert response.status_code == 200
    assert response.content == b""


def test_resolve_path_rejects_escape(tmp_path: Path) -> None:
    """Paths resolving outside the serve root are refused."""
    with pytest.raises(ContentPathError):
        resolve_path(tmp_path, "../outside.txt")
    with pytest.raises(ContentPathError):
        resolve_path(tmp_path, "a\0b")

    assert resolve_path(tmp_path, "/a/b.css") == tmp_path.resolve() / "a" / "b.css"


def test_content_type_for_unknown_and_missing_extension() -> None:
    """Anything not in the table falls back to text/plain."""
    assert content_type_for("archive.tar.gz") == "text/plain"
    assert content_type_for("Makefile") == "text/plain"
    assert content_type_for("bundle.min.js") == "application/javascript"


def test_inject_only_replaces_first_body_tag() -> None:
    """Only the first opening body tag is replaced."""
    document = "<body>one</body><body>two</body>"
    result = inject_reload_listener(document, "events")

    assert result.count("<script>") == 1
    assert "new EventSource('events')" in result
    assert result.endswith("<body>two</body>")


def test_inject_leaves_documents_without_body_tag() -> None:
    """Documents without a bare body tag are untouched."""
    document = '<body class="x">content</body>'
    assert inject_reload_listener(document) == document
