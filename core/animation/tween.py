"""
Time-based interpolation of a single value.

A Tween does not tick. It records when it started and is sampled on demand
against the scheduler clock, so a renderer polling at any frame rate sees a
value consistent with the phase timeline and callbacks that fire late never
make the interpolation drift.
"""
from dataclasses import dataclass

from core.animation.types import EasingCurve
from core.animation.easing import ease


@dataclass(frozen=True)
class Tween:
    """Interpolates start_value -> end_value over duration seconds."""
    start_value: float
    end_value: float
    duration: float
    started_at: float
    easing: EasingCurve = EasingCurve.LINEAR

    @classmethod
    def hold(cls, value: float, started_at: float = 0.0) -> "Tween":
        """A tween that sits at ``value`` forever."""
        return cls(value, value, 0.0, started_at)

    def progress_at(self, now: float) -> float:
        """Linear progress in [0, 1]."""
        if self.duration <= 0:
            return 1.0
        return max(0.0, min(1.0, (now - self.started_at) / self.duration))

    def value_at(self, now: float) -> float:
        progress = self.progress_at(now)
        if progress >= 1.0:
            return self.end_value
        eased = ease(progress, self.easing)
        return self.start_value + (self.end_value - self.start_value) * eased

    def is_complete(self, now: float) -> bool:
        return self.progress_at(now) >= 1.0

    @property
    def ends_at(self) -> float:
        return self.started_at + max(0.0, self.duration)
