"""
scheduler.py — Timed Continuations
===================================
The Stepper never sleeps.  It hands a callback and a delay to a
scheduler and gets back a handle it can cancel.  Two hosts:

  • AsyncioScheduler – wraps loop.call_later, for asyncio programs.
  • ManualScheduler  – keeps a list of due times against a clock and
                       fires whatever is due when run_due() is called.
                       The web UI polls /api/tick, which calls run_due();
                       tests pass a fake clock and move it by hand.

Both accept delays in milliseconds.
"""

import asyncio
import itertools
import time
from typing import Callable, List, Optional


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------
class ScheduledCall:
    """A pending continuation.  cancel() is idempotent."""

    def __init__(self, due: float, seq: int, callback: Callable[[], None]):
        self.due       = due
        self.seq       = seq
        self.callback  = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class _AsyncioCall:
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------
class AsyncioScheduler:
    """
    Without an explicit loop, the loop running when the first
    continuation is scheduled is used; scheduling outside a running
    loop then raises RuntimeError.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _AsyncioCall:
        return _AsyncioCall(self.loop.call_later(max(0.0, delay_ms) / 1000.0, callback))


class ManualScheduler:
    """
    Attributes:
        clock : Zero-argument callable returning seconds (time.monotonic
                by default).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._pending: List[ScheduledCall] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.clock() + max(0.0, delay_ms) / 1000.0, next(self._counter), callback)
        self._pending.append(call)
        return call

    def run_due(self) -> int:
        """Fire every continuation whose due time has passed.  Returns how many ran."""
        ran = 0
        while True:
            now = self.clock()
            self._pending = [c for c in self._pending if not c.cancelled]
            due = [c for c in self._pending if c.due <= now]
            if not due:
                return ran
            call = min(due, key=lambda c: (c.due, c.seq))
            self._pending.remove(call)
            call.callback()
            ran += 1

    @property
    def pending(self) -> int:
        return sum(1 for c in self._pending if not c.cancelled)

    def next_due(self) -> Optional[float]:
        live = [c.due for c in self._pending if not c.cancelled]
        return min(live) if live else None
