"""
Easing curves for the fade phases.

Each curve maps linear progress t in [0.0, 1.0] onto eased progress in
[0.0, 1.0], with f(0) == 0 and f(1) == 1. FadeIn accelerates (QUAD_IN) and
FadeOut decelerates (QUAD_OUT); LINEAR is the Tween default.
"""
from typing import Callable
from core.animation.types import EasingCurve


def linear(t: float) -> float:
    return t


def quad_in(t: float) -> float:
    """Slow start, accelerating: half the time covers a quarter of the range."""
    return t * t


def quad_out(t: float) -> float:
    """Fast start, decelerating: half the time covers three quarters."""
    return t * (2 - t)


EASING_FUNCTIONS: dict[EasingCurve, Callable[[float], float]] = {
    EasingCurve.LINEAR: linear,
    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
}


def get_easing_function(curve: EasingCurve) -> Callable[[float], float]:
    """
    Look up the function for ``curve``.

    Raises:
        ValueError: If curve has no registered function
    """
    try:
        return EASING_FUNCTIONS[curve]
    except KeyError:
        raise ValueError(f"Unknown easing curve: {curve}") from None


def ease(t: float, curve: EasingCurve) -> float:
    """Apply an easing curve to t, clamping t to [0, 1] first."""
    t = max(0.0, min(1.0, t))
    # Exact endpoints so tweens land on their start/end values
    if t == 0.0:
        return 0.0
    if t == 1.0:
        return 1.0
    return get_easing_function(curve)(t)
