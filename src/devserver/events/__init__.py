"""Events subsystem for directory watching and live-reload broadcasting."""
from devserver.events.broadcaster import Broadcaster, PublishResult
from devserver.events.debounce import Debouncer
from devserver.events.stream import EventStream
from devserver.events.watcher import DirectoryWatcher, discover_directories

__all__ = [
    "Broadcaster",
    "Debouncer",
    "DirectoryWatcher",
    "EventStream",
    "PublishResult",
    "discover_directories",
]
