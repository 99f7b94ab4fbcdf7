"""Single-sink event broadcaster for live-reload notifications."""

from collections.abc import Callable
from enum import Enum

import structlog

logger = structlog.get_logger()

Sink = Callable[[str], None]


class PublishResult(str, Enum):
    """Outcome of a publish call."""

    DELIVERED = "delivered"
    NO_SINK = "no_sink"
    FAILED = "failed"


class Broadcaster:
    """Holds the current event sink and dispatches events to it.

    Only the most recently connected stream receives events. Registering a
    new sink displaces the previous one without closing its connection.
    A sink whose client has gone away stays registered until replaced;
    publishing to it reports ``FAILED`` instead of raising.
    """

    def __init__(self) -> None:
        """Initialize broadcaster with no sink."""
        self._sink: Sink | None = None
        self._published = 0
        self._failed = 0

    @property
    def has_sink(self) -> bool:
        """Whether a sink is currently registered."""
        return self._sink is not None

    @property
    def delivered_events(self) -> int:
        """Number of events handed to a sink without error."""
        return self._published

    @property
    def failed_deliveries(self) -> int:
        """Number of publish calls whose sink raised."""
        return self._failed

    def set_sink(self, sink: Sink) -> None:
        """Make ``sink`` the destination for subsequent events.

        Args:
            sink: Callable receiving each published payload.
        """
        if self._sink is not None:
            logger.debug("sink_replaced")
        self._sink = sink

    def publish(self, event: str) -> PublishResult:
        """Deliver an event payload to the current sink.

        Args:
            event: Payload string without newlines.

        Returns:
            Whether the event was delivered, dropped for lack of a sink,
            or rejected by the sink.
        """
        sink = self._sink
        if sink is None:
            logger.debug("dispatch_event_dropped", payload=event)
            return PublishResult.NO_SINK

        logger.info("dispatch_event", payload=event)
        try:
            sink(event)
        except Exception as e:
            self._failed += 1
            logger.debug("dispatch_event_failed", payload=event, error=str(e))
            return PublishResult.FAILED

        self._published += 1
        return PublishResult.DELIVERED
