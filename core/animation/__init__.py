"""Animation value types, easing and tweens."""

from .types import (
    AnimationState,
    BLACK,
    Color,
    EasingCurve,
    EngineStatus,
    Phase,
    Symbol,
)
from .easing import ease, get_easing_function, EASING_FUNCTIONS
from .tween import Tween

__all__ = [
    # Types
    'AnimationState',
    'BLACK',
    'Color',
    'EasingCurve',
    'EngineStatus',
    'Phase',
    'Symbol',

    # Easing
    'ease',
    'get_easing_function',
    'EASING_FUNCTIONS',

    # Interpolation
    'Tween',
]
