"""Recurring, cancellable game clock ticks.

The tracker owns exactly one tick source and starts or stops it as the game
clock runs. Two implementations are provided:

- AsyncioClock schedules ticks on the running asyncio event loop, so ticks
  and UI-triggered mutations share one single-threaded execution context.
- ManualClock only ticks when advanced explicitly, for tests and replays.

Example:
    >>> ticks = []
    >>> clock = ManualClock(lambda: ticks.append(1))
    >>> clock.start()
    >>> clock.advance(3)
    3
    >>> len(ticks)
    3
"""

from __future__ import annotations

import asyncio

from courtside.logging import get_logger
from courtside.types import TickCallback

logger = get_logger(__name__)

DEFAULT_TICK_INTERVAL: float = 1.0


class AsyncioClock:
    """Tick source driven by ``loop.call_at``.

    Tick ``n`` is due at ``start + n * interval`` on the loop's clock, so time
    spent in callbacks does not push later ticks back. Only one tick is ever
    pending. Stopping cancels it, and a stopped clock ignores a callback that
    was already dequeued by the loop.
    """

    def __init__(
        self,
        on_tick: TickCallback,
        interval: float = DEFAULT_TICK_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the clock.

        Args:
            on_tick: Called once per elapsed interval while running.
            interval: Seconds between ticks.
            loop: Event loop to schedule on. Defaults to the running loop
                at ``start()`` time.
        """
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._on_tick = on_tick
        self.interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._deadline: float | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def deadline(self) -> float | None:
        """Loop time at which the pending tick is due, if any."""
        return self._deadline if self._handle is not None else None

    def start(self) -> None:
        if self._running:
            return
        loop = self._loop or asyncio.get_running_loop()
        self._loop = loop
        self._running = True
        self._schedule(loop, loop.time() + self.interval)
        logger.debug("Clock started (interval={}s)", self.interval)

    def stop(self) -> None:
        if not self._running and self._handle is None:
            return
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Clock stopped")

    def _schedule(self, loop: asyncio.AbstractEventLoop, deadline: float) -> None:
        self._deadline = deadline
        self._handle = loop.call_at(deadline, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        due = self._deadline
        try:
            self._on_tick()
        finally:
            # The callback may have stopped (or restarted) the clock
            if self._running and self._handle is None and due is not None:
                self._schedule(asyncio.get_running_loop(), due + self.interval)


class ManualClock:
    """Tick source advanced by hand.

    Ticks are delivered only while started, one per simulated second.
    """

    def __init__(self, on_tick: TickCallback) -> None:
        self._on_tick = on_tick
        self._running = False
        self.ticks_delivered = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    def advance(self, seconds: int = 1) -> int:
        """Deliver up to ``seconds`` ticks, stopping early if the clock stops.

        Args:
            seconds: Number of simulated seconds to elapse.

        Returns:
            Number of ticks actually delivered.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance by a negative duration: {seconds}")
        delivered = 0
        for _ in range(seconds):
            if not self._running:
                break
            self._on_tick()
            delivered += 1
        self.ticks_delivered += delivered
        return delivered
