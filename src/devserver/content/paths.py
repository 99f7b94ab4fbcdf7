"""Path resolution for files served from the serve root."""
from pathlib import Path


class ContentPathError(Exception):
    """Raised when a requested path cannot be mapped inside the serve root."""

    def __init__(self, message: str, path: str) -> None:
        """Initialize content path error.

        Args:
            message: Error description.
            path: The offending request path.
        """
        super().__init__(message)
        self.path = path


def resolve_path(root: Path, request_path: str) -> Path:
    """Resolve a request path to a file inside ``root``.

    Args:
        root: Absolute serve root.
        request_path: URL path, with or without a leading slash.

    Returns:
        Absolute path of the requested file.

    Raises:
        ContentPathError: If the path contains null bytes or resolves
            outside the serve root.
    """
    if "\0" in request_path:
        raise ContentPathError("Path contains null byte", request_path)

    root = root.resolve()
    resolved = (root / request_path.lstrip("/")).resolve()

    if resolved != root and root not in resolved.parents:
        raise ContentPathError(f"Path resolves outside serve root: {root}", request_path)

    return resolved
