"""Trailing-edge debouncing for callbacks on the event loop."""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger()


class Debouncer:
    """Coalesce bursts of calls into one delayed invocation.

    Every call re-arms a timer ``delay_ms`` after the latest call. When the
    timer fires, the action runs once with the arguments of that latest call.
    With ``leading`` set, the very first call also runs the action
    immediately.

    Timers are scheduled with ``loop.call_later``, so instances must only be
    called from the event loop thread.

    Attributes:
        delay_ms: Quiet period in milliseconds.
        leading: Whether the first call fires immediately.
    """

    def __init__(
        self,
        action: Callable[..., Any],
        delay_ms: int = 200,
        *,
        leading: bool = False,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize debouncer.

        Args:
            action: Callable to run after the quiet period.
            delay_ms: Quiet period in milliseconds.
            leading: Run the action immediately on the first call.
            loop: Event loop for timers. Defaults to the running loop.
        """
        self._action = action
        self.delay_ms = delay_ms
        self.leading = leading
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._called = False

    @property
    def pending(self) -> bool:
        """Whether a trailing invocation is scheduled."""
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        """Register a call and re-arm the trailing timer.

        Args:
            *args: Arguments passed to the action when it fires.
        """
        loop = self._loop or asyncio.get_running_loop()

        if self.leading and not self._called:
            self._run(args)
        self._called = True

        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay_ms / 1000.0, self._fire, args)

    def cancel(self) -> None:
        """Drop the scheduled trailing invocation, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._handle = None
        self._run(args)

    def _run(self, args: tuple[Any, ...]) -> None:
        try:
            self._action(*args)
        except Exception as e:
            logger.error("debounced_action_failed", error=str(e), exc_info=True)
