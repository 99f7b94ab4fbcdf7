"""Reading static files for the dev server."""
from pathlib import Path

import structlog

logger = structlog.get_logger()


class FileSystemError(Exception):
    """Raised when a served file cannot be read."""

    def __init__(self, message: str, path: str, code: str | None = None) -> None:
        """Initialize filesystem error.

        Args:
            message: Error description.
            path: Path that caused the error.
            code: Optional error code (e.g., ENOENT).
        """
        super().__init__(message)
        self.path = path
        self.code = code


def read_file(filepath: Path) -> bytes:
    """Read a file's raw bytes.

    Args:
        filepath: Absolute path to the file.

    Returns:
        File contents.

    Raises:
        FileSystemError: If the file cannot be read.
    """
    try:
        return filepath.read_bytes()
    except FileNotFoundError as e:
        raise FileSystemError(
            f"File not found: {filepath}",
            str(filepath),
            "ENOENT",
        ) from e
    except PermissionError as e:
        raise FileSystemError(
            f"Permission denied: {filepath}",
            str(filepath),
            "EACCES",
        ) from e
    except IsADirectoryError as e:
        raise FileSystemError(
            f"Is a directory: {filepath}",
            str(filepath),
            "EISDIR",
        ) from e
    except OSError as e:
        raise FileSystemError(
            f"Failed to read file: {e}",
            str(filepath),
            getattr(e, "errno", None),
        ) from e
