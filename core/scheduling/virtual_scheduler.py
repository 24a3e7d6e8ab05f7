"""Deterministic scheduler driven by an explicit virtual clock.

Nothing fires on its own: the owner calls ``advance``/``advance_to`` and every
callback whose deadline falls inside the window runs synchronously, in
deadline order. Used for the offline timeline simulation and for tests that
need exact phase boundaries without sleeping.
"""
from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple

from core.logging.logger import get_logger
from core.scheduling.scheduler import (
    Scheduler,
    TimerHandle,
    describe_callback,
    validate_delay,
    validate_interval,
)

logger = get_logger(__name__)


class _VirtualTimer(TimerHandle):
    """Heap entry payload. Cancelled timers are skipped lazily when popped."""

    def __init__(
        self,
        seq: int,
        deadline: float,
        callback: Callable[[], None],
        description: str,
        interval: Optional[float] = None,
        origin: Optional[float] = None,
    ) -> None:
        super().__init__(description)
        self.seq = seq
        self.deadline = deadline
        self.callback = callback
        self.interval = interval
        self.origin = deadline if origin is None else origin
        self.fire_count = 0
        self._active = True

    def cancel(self) -> None:
        self._active = False

    def is_active(self) -> bool:
        return self._active


class VirtualScheduler(Scheduler):
    """Scheduler whose clock only moves when told to.

    Ties between equal deadlines resolve in creation order; a recurring timer
    keeps the order it was created with for every repeat.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = float(start_time)
        self._queue: List[Tuple[float, int, _VirtualTimer]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def single_shot(
        self,
        delay_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        delay = validate_delay(delay_s, callback)
        timer = _VirtualTimer(
            next(self._seq),
            self._now + delay,
            callback,
            describe_callback(callback, description),
        )
        self._push(timer)
        return timer

    def schedule_recurring(
        self,
        interval_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        interval = validate_interval(interval_s, callback)
        timer = _VirtualTimer(
            next(self._seq),
            self._now + interval,
            callback,
            describe_callback(callback, description),
            interval=interval,
            origin=self._now,
        )
        self._push(timer)
        return timer

    def advance(self, delta_s: float) -> int:
        """Move the clock forward by ``delta_s``; returns callbacks fired."""
        if delta_s < 0:
            raise ValueError(f"Cannot advance by a negative amount: {delta_s!r}")
        return self.advance_to(self._now + delta_s)

    def advance_to(self, target: float) -> int:
        """Move the clock to ``target``, firing everything due on the way.

        Callbacks scheduled while advancing also fire if their deadline is
        not after ``target``.
        """
        if target < self._now:
            raise ValueError(f"Cannot move clock backwards ({target!r} < {self._now!r})")

        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, timer = heapq.heappop(self._queue)
            if not timer.is_active():
                continue
            self._now = max(self._now, deadline)

            if timer.interval is None:
                timer.cancel()
            else:
                # Multiply instead of accumulating so repeats never drift
                timer.fire_count += 1
                timer.deadline = timer.origin + (timer.fire_count + 1) * timer.interval
                self._push(timer)

            try:
                timer.callback()
            except Exception:
                logger.exception("[SCHED] Virtual timer %r raised", timer.description)
            fired += 1

        self._now = target
        return fired

    def pending_count(self) -> int:
        """Number of timers still due to fire."""
        return sum(1 for _, _, timer in self._queue if timer.is_active())

    def next_deadline(self) -> Optional[float]:
        """Earliest deadline among active timers, or None when idle."""
        active = [deadline for deadline, _, timer in self._queue if timer.is_active()]
        return min(active) if active else None

    def _push(self, timer: _VirtualTimer) -> None:
        heapq.heappush(self._queue, (timer.deadline, timer.seq, timer))
