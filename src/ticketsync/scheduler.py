"""Fixed-interval poll scheduler.

One scheduler owns at most one timer task. Re-arming replaces the timer
(the previous one is cancelled first), and cancelling is idempotent.
Tick callbacks run as independent tasks: a slow tick does not delay the
next one, and a tick already in flight when the timer is cancelled runs
to completion.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

_logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[None]]


class SchedulerState(StrEnum):
    IDLE = "idle"
    ACTIVE = "active"


class PollScheduler:
    """Owns a single repeating timer.

    Usage::

        scheduler = PollScheduler()
        scheduler.arm(2.0, refresh)
        ...
        scheduler.cancel()
    """

    def __init__(self, *, name: str = "poll") -> None:
        self._name = name
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self._ticks = 0

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.ACTIVE if self._timer is not None else SchedulerState.IDLE

    @property
    def is_active(self) -> bool:
        return self._timer is not None

    @property
    def ticks(self) -> int:
        """Number of ticks fired since construction."""
        return self._ticks

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def arm(self, interval: float, callback: TickCallback) -> None:
        """Start ticking every *interval* seconds, replacing any current timer."""
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.create_task(self._run(interval, callback), name=f"{self._name}-timer")
        _logger.debug("%s armed every %.3fs", self._name, interval)

    def cancel(self) -> bool:
        """Stop the timer. Returns ``True`` if a timer was running."""
        timer, self._timer = self._timer, None
        if timer is None:
            return False
        timer.cancel()
        _logger.debug("%s cancelled", self._name)
        return True

    async def drain(self) -> None:
        """Wait for ticks already in flight to settle."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def _run(self, interval: float, callback: TickCallback) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += interval
            now = loop.time()
            if next_at <= now:
                # Stalled loop: skip the missed ticks instead of replaying them.
                next_at = now + interval
            self._ticks += 1
            tick = loop.create_task(self._fire(callback), name=f"{self._name}-tick-{self._ticks}")
            self._inflight.add(tick)
            tick.add_done_callback(self._inflight.discard)

    async def _fire(self, callback: TickCallback) -> None:
        try:
            await callback()
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.exception("%s tick failed", self._name)
