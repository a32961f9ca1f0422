"""Debounce scheduler for coalescing rapid value updates.

Each schedule() call acquires a cancellable asyncio.TimerHandle and
releases the previous one, so at most one emission is pending at any
time. The handle is also released when it fires, on cancel(), on
flush() and on close(); after close() nothing is ever emitted into the
consumer again.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DebounceScheduler(Generic[T]):
    """Emits the latest scheduled value once input has been quiet long enough.

    A delay of 0 still defers the emission to a later turn of the event
    loop; schedule() never calls the consumer synchronously.
    """

    def __init__(
        self,
        on_emit: Callable[[T], None],
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """Initialize the scheduler.

        Args:
            on_emit: Consumer called with each emitted value.
            loop: Event loop for timers. Defaults to the running loop at
                the time of the first schedule() call.
        """
        self._on_emit = on_emit
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending_value: T | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        """True while an emission is scheduled and has not fired."""
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, value: T, delay_ms: int) -> None:
        """Supersede any pending emission with value after delay_ms.

        Raises:
            ValueError: If delay_ms is negative.
            RuntimeError: If the scheduler has been closed.
        """
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        if self._closed:
            raise RuntimeError("Cannot schedule on a closed DebounceScheduler")

        self._release()
        loop = self._loop or asyncio.get_running_loop()
        self._pending_value = value
        self._handle = loop.call_later(delay_ms / 1000, self._fire)

    def cancel(self) -> bool:
        """Drop the pending emission, if any.

        Returns:
            True if an emission was pending and is now cancelled.
        """
        was_pending = self.pending
        self._release()
        return was_pending

    def flush(self) -> bool:
        """Emit the pending value right now instead of waiting.

        Returns:
            True if a value was pending and has been emitted.
        """
        if self._handle is None:
            return False
        value = self._pending_value
        self._release()
        self._emit(value)  # type: ignore[arg-type]
        return True

    def close(self) -> None:
        """Tear down: cancel any pending emission and refuse new ones."""
        if self._closed:
            return
        if self.cancel():
            logger.debug("Debounce scheduler closed with a pending emission")
        self._closed = True

    async def __aenter__(self) -> "DebounceScheduler[T]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_value = None

    def _fire(self) -> None:
        value = self._pending_value
        self._handle = None
        self._pending_value = None
        self._emit(value)  # type: ignore[arg-type]

    def _emit(self, value: T) -> None:
        try:
            self._on_emit(value)
        except Exception as e:
            logger.error(f"Debounce consumer failed: {e}", exc_info=True)
