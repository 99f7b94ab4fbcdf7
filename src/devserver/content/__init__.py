"""Content module for static file access."""

from devserver.content.injection import inject_reload_listener, reload_listener
from devserver.content.loader import FileSystemError, read_file
from devserver.content.paths import ContentPathError, resolve_path
from devserver.content.content_types import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, content_type_for

__all__ = [
    "CONTENT_TYPES",
    "DEFAULT_CONTENT_TYPE",
    "ContentPathError",
    "FileSystemError",
    "content_type_for",
    "inject_reload_listener",
    "read_file",
    "reload_listener",
    "resolve_path",
]
