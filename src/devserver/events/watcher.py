"""Recursive directory watcher with debounced change batches."""

import asyncio
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from devserver.events.debounce import Debouncer

logger = structlog.get_logger()

# Reads of watched files (e.g. serving them) must not look like changes.
IGNORED_EVENT_TYPES: frozenset[str] = frozenset({"opened", "closed_no_write"})

DEFAULT_DEBOUNCE_MS = 100


def _decode(path: str | bytes) -> str:
    if isinstance(path, str):
        return path
    return bytes(path).decode("utf-8", errors="replace")


def discover_directories(root: str, folders: list[str] | None = None) -> list[str]:
    """Collect every directory nested under ``root``, depth-first.

    Symlinked directories are skipped: neither listed nor descended
    into. A directory that cannot be read is logged and its
    branch is skipped; siblings are still scanned.

    Args:
        root: Directory to scan.
        folders: Accumulator used by the recursion.

    Returns:
        Paths of nested directories built as ``parent + "/" + name``,
        not including ``root`` itself.
    """
    if folders is None:
        folders = []

    try:
        entries = sorted(Path(root).iterdir())
    except OSError as e:
        logger.error("directory_scan_failed", path=root, error=str(e))
        return folders

    for entry in entries:
        if entry.is_symlink() or not entry.is_dir():
            continue
        folder = f"{root}/{entry.name}"
        folders.append(folder)
        discover_directories(folder, folders)

    return folders


class DirectoryChangeHandler(FileSystemEventHandler):
    """Watchdog handler for a single, non-recursively watched directory.

    Turns every event into ``directory + "/" + name`` and forwards it.
    Runs on the observer thread.
    """

    def __init__(self, directory: str, forward: Callable[[str], None]) -> None:
        """Initialize handler.

        Args:
            directory: Watched directory as passed to the observer.
            forward: Called with each changed path.
        """
        super().__init__()
        self.directory = directory
        self._forward = forward

    def changed_paths(self, event: FileSystemEvent) -> list[str]:
        """Map an event to the changed entry paths inside this directory.

        Args:
            event: Raw watchdog filesystem event.

        Returns:
            Zero, one or two paths (moves report both names).
        """
        if event.event_type in IGNORED_EVENT_TYPES:
            return []

        paths: list[str] = []
        src_path = _decode(event.src_path)
        if src_path and src_path != self.directory:
            paths.append(f"{self.directory}/{os.path.basename(src_path)}")

        dest_path = _decode(getattr(event, "dest_path", "") or "")
        if dest_path and os.path.dirname(dest_path) == self.directory:
            paths.append(f"{self.directory}/{os.path.basename(dest_path)}")

        return paths

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Forward changed paths for an event.

        Args:
            event: Raw watchdog filesystem event.
        """
        for path in self.changed_paths(event):
            self._forward(path)


class DirectoryWatcher:
    """Watch a directory tree and relay coalesced change batches.

    ``start`` scans the root once and schedules one non-recursive watch per
    directory found. Directories created afterwards are not watched.
    Changed paths accumulate in a shared set; a debounced relay calls
    ``on_batch`` with that set after ``debounce_ms`` of quiet. The callback
    owns clearing the set once it has dispatched the batch.

    All bookkeeping happens on the event loop thread; observer threads only
    hand paths over with ``call_soon_threadsafe``.

    Attributes:
        root: Watch root as given.
        debounce_ms: Quiet period before a batch is relayed.
    """

    def __init__(
        self,
        root: str | Path,
        on_batch: Callable[[set[str]], Any],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ) -> None:
        """Initialize directory watcher.

        Args:
            root: Directory tree to watch.
            on_batch: Called with the pending change set after each burst.
            debounce_ms: Quiet period in milliseconds.
        """
        self.root = str(Path(root))
        self.debounce_ms = debounce_ms
        self._pending: set[str] = set()
        self._relay = Debouncer(on_batch, debounce_ms)
        self._watched: list[str] = []
        self._loop: asyncio.AbstractEventLoop | None = None
        self._observer: Observer | None = None  # pyright: ignore[reportInvalidTypeForm]

    @property
    def watched_directories(self) -> list[str]:
        """Directories with an installed observer."""
        return self._watched.copy()

    @property
    def pending(self) -> set[str]:
        """Changed paths not yet cleared by the batch callback."""
        return self._pending

    async def start(self) -> list[str]:
        """Scan the root and install an observer on every directory.

        A missing or unreadable root is logged and leaves the watcher idle.

        Returns:
            Directories now being watched.
        """
        self._loop = asyncio.get_running_loop()

        if not Path(self.root).is_dir():
            logger.error("watch_root_unavailable", path=self.root)
            return []

        subfolders = await asyncio.to_thread(discover_directories, self.root)

        observer = Observer()
        observer.start()
        self._observer = observer

        for folder in [self.root, *subfolders]:
            handler = DirectoryChangeHandler(folder, self._forward)
            try:
                observer.schedule(handler, folder, recursive=False)
            except OSError as e:
                logger.error("watch_install_failed", path=folder, error=str(e))
                continue
            self._watched.append(folder)

        logger.info(
            "watching_folder",
            path=self.root,
            directories=len(self._watched),
        )
        return self.watched_directories

    def stop(self) -> None:
        """Cancel the pending relay and stop all observers."""
        self._relay.cancel()

        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        logger.info("watcher_stopped", path=self.root)

    def _forward(self, path: str) -> None:
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._record, path)

    def _record(self, path: str) -> None:
        self._pending.add(path)
        self._relay(self._pending)
