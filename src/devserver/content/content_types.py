"""Content type lookup by file extension."""

DEFAULT_CONTENT_TYPE = "text/plain"

CONTENT_TYPES: dict[str, str] = {
    "css": "text/css",
    "html": "text/html",
    "js": "application/javascript",
    "json": "application/json",
}


def content_type_for(path: str) -> str:
    """Return the content type for a path based on its last extension.

    Args:
        path: File path or name.

    Returns:
        Mapped content type, ``text/plain`` for anything unknown.
    """
    extension = path.rsplit(".", 1)[-1] if "." in path else ""
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)
