"""Schedule-after primitive shared by the animation engine and its hosts.

The engine only ever talks to a ``Scheduler``: one-shot callbacks for phase
advances and colour changes, one recurring callback for the elapsed clock.
Every call returns a ``TimerHandle`` so the owner can cancel what it
scheduled. Implementations run all callbacks on a single scheduling context
(the Qt event loop, or the caller of ``VirtualScheduler.advance``).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle(ABC):
    """Cancellable reference to a scheduled callback.

    Callers keep the handle instead of the underlying timer object so they
    stay agnostic about which scheduler produced it.
    """

    def __init__(self, description: str) -> None:
        self.description = description

    @abstractmethod
    def cancel(self) -> None:
        """Stop the callback from firing again. Safe to call repeatedly."""

    @abstractmethod
    def is_active(self) -> bool:
        """True while the callback is still due to fire."""

    def __repr__(self) -> str:
        state = "active" if self.is_active() else "inactive"
        return f"<{type(self).__name__} {self.description!r} {state}>"


class Scheduler(ABC):
    """Clock plus delayed/recurring callback dispatch. Times are seconds."""

    @abstractmethod
    def now(self) -> float:
        """Monotonic time in seconds on this scheduler's clock."""

    @abstractmethod
    def single_shot(
        self,
        delay_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        """Run ``callback`` once after ``delay_s`` seconds."""

    @abstractmethod
    def schedule_recurring(
        self,
        interval_s: float,
        callback: Callable[[], None],
        description: Optional[str] = None,
    ) -> TimerHandle:
        """Run ``callback`` every ``interval_s`` seconds until cancelled."""


def describe_callback(callback: Callable, description: Optional[str] = None) -> str:
    """Best-effort label for a callback, used in logs and handle reprs."""
    if description:
        return description
    return getattr(callback, "__qualname__", None) or getattr(callback, "__name__", None) or "timer"


def validate_delay(delay_s: float, callback: Callable) -> float:
    if not callable(callback):
        raise ValueError("Timer callback must be callable")
    delay = float(delay_s)
    if delay < 0:
        raise ValueError(f"Timer delay must be >= 0, got {delay_s!r}")
    return delay


def validate_interval(interval_s: float, callback: Callable) -> float:
    if not callable(callback):
        raise ValueError("Timer callback must be callable")
    interval = float(interval_s)
    if interval <= 0:
        raise ValueError(f"Recurring interval must be > 0, got {interval_s!r}")
    return interval
