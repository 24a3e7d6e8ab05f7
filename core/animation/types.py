"""
Animation types, enums, and dataclasses.

Defines the values shared by the animation engine and its consumers: the
phase cycle, catalog symbols, colours and the published state snapshot.
"""
import random
import uuid
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional

from core.constants.sizes import OPACITY_HIDDEN, SCALE_MIN
from core.constants.timing import FADE_IN_TIME_S, FADE_OUT_TIME_S, STABLE_TIME_S


class EngineStatus(Enum):
    """Lifecycle of an AnimationEngine."""
    IDLE = "idle"          # Constructed, start() not yet called
    RUNNING = "running"    # Scheduling phases and clock ticks
    STOPPED = "stopped"    # shutdown() called, all timers cancelled


class Phase(Enum):
    """Animation sub-state of the displayed symbol.

    The value is the human-readable label shown by the preview.
    """
    FADE_IN = "Fade In"
    STABLE = "Stable"
    FADE_OUT = "Fade Out"

    def next(self) -> "Phase":
        """Cyclic successor: FadeIn -> Stable -> FadeOut -> FadeIn."""
        return _PHASE_SUCCESSORS[self]

    @property
    def label(self) -> str:
        return self.value

    @property
    def duration(self) -> float:
        """Fixed length of this phase in seconds."""
        return _PHASE_DURATIONS[self]


_PHASE_SUCCESSORS = {
    Phase.FADE_IN: Phase.STABLE,
    Phase.STABLE: Phase.FADE_OUT,
    Phase.FADE_OUT: Phase.FADE_IN,
}

_PHASE_DURATIONS = {
    Phase.FADE_IN: FADE_IN_TIME_S,
    Phase.STABLE: STABLE_TIME_S,
    Phase.FADE_OUT: FADE_OUT_TIME_S,
}


class EasingCurve(Enum):
    """Rate-of-change curves a Tween can apply to its progress."""
    LINEAR = "linear"
    QUAD_IN = "quad_in"      # FadeIn
    QUAD_OUT = "quad_out"    # FadeOut


@dataclass(frozen=True)
class Color:
    """RGB colour with float channels; random() draws each from [0, 1)."""
    red: float
    green: float
    blue: float

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "Color":
        """Draw each channel independently and uniformly from [0, 1)."""
        r = rng or random
        return cls(r.random(), r.random(), r.random())

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_rgb255(self) -> tuple[int, int, int]:
        return tuple(max(0, min(255, round(c * 255))) for c in self.to_tuple())

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.to_rgb255())


BLACK = Color(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Symbol:
    """A catalog entry: icon name plus the text shown under it."""
    name: str
    description: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])


@dataclass(frozen=True)
class AnimationState:
    """Snapshot of everything a renderer needs for one frame.

    ``symbol`` is None until the engine has started. ``elapsed`` is the
    free-running display clock, in [0, TOTAL_DISPLAY_TIME_S).
    """
    symbol: Optional[Symbol] = None
    symbol_index: int = -1
    phase: Phase = Phase.FADE_IN
    opacity: float = OPACITY_HIDDEN
    scale: float = SCALE_MIN
    color: Color = BLACK
    elapsed: float = 0.0

    def time_label(self) -> str:
        return f"Time: {self.elapsed:.1f}s"

    def state_label(self) -> str:
        return f"State: {self.phase.label}"
