"""
Clock and periodic scheduling capabilities for the run timer.

The run timer never reads the host clock or installs host callbacks
directly. It is handed a Clock and a Scheduler so that tests can drive time
and ticks by hand.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional


class Clock(ABC):
    """Source of the current instant, in seconds."""

    @abstractmethod
    def now(self) -> float:
        """Return the current instant in seconds on a monotonic scale."""
        pass


class MonotonicClock(Clock):
    """Clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class TickHandle(ABC):
    """Handle to a repeating tick installed by a Scheduler."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the tick. Calling this more than once is harmless."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether the tick has been cancelled."""
        pass


class Scheduler(ABC):
    """Installs repeating callbacks."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        """
        Call ``callback`` every ``interval`` seconds until the handle is cancelled.

        The first call happens one interval after installation.
        """
        pass


class _AsyncioTickHandle(TickHandle):
    """Repeating tick that re-arms itself with ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float,
                 callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def arm(self) -> None:
        self._timer = self._loop.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        finally:
            # Re-arm even if the callback raised; the loop reports the error
            if not self._cancelled:
                self.arm()

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """Scheduler that installs ticks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        handle = _AsyncioTickHandle(self.loop, interval, callback)
        handle.arm()
        return handle
