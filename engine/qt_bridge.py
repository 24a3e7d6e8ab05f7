"""Qt signal adapter for the animation engine.

Views built on Qt (widgets or QML) connect to these signals instead of
subscribing to the EventSystem directly. The engine stays free of Qt; this
module is the only place engine events cross into Qt's signal system.
"""
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from core.animation.types import AnimationState, Color, Phase, Symbol
from core.events import Event, EventType
from core.logging.logger import get_logger
from engine.symbol_engine import AnimationEngine

logger = get_logger(__name__)


class EngineSignalBridge(QObject):
    """
    Re-emits engine events as Qt signals.

    Signals:
    - state_changed: every published AnimationState
    - phase_changed: phase label ("Fade In", "Stable", "Fade Out")
    - symbol_changed: (icon name, description)
    - color_changed: colour as "#rrggbb"
    - elapsed_changed: elapsed display time in seconds
    """

    state_changed = Signal(object)
    phase_changed = Signal(str)
    symbol_changed = Signal(str, str)
    color_changed = Signal(str)
    elapsed_changed = Signal(float)

    def __init__(self, engine: AnimationEngine, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._engine = engine
        self._subscription_ids: List[str] = []

        events = engine.events
        self._subscription_ids = [
            events.subscribe(EventType.STATE_CHANGED, self._on_state),
            events.subscribe(EventType.PHASE_CHANGED, self._on_phase),
            events.subscribe(EventType.SYMBOL_CHANGED, self._on_symbol),
            events.subscribe(EventType.COLOR_CHANGED, self._on_color),
            events.subscribe(EventType.CLOCK_TICK, self._on_tick),
        ]
        logger.debug("[BRIDGE] Attached to engine (%d subscriptions)", len(self._subscription_ids))

    @property
    def is_attached(self) -> bool:
        return bool(self._subscription_ids)

    def detach(self) -> None:
        """Stop forwarding engine events. Safe to call more than once."""
        if not self._subscription_ids:
            return
        for sub_id in self._subscription_ids:
            self._engine.events.unsubscribe(sub_id)
        self._subscription_ids = []
        logger.debug("[BRIDGE] Detached from engine")

    def _on_state(self, event: Event) -> None:
        state: AnimationState = event.data
        self.state_changed.emit(state)

    def _on_phase(self, event: Event) -> None:
        phase: Phase = event.data
        self.phase_changed.emit(phase.label)

    def _on_symbol(self, event: Event) -> None:
        symbol: Symbol = event.data
        self.symbol_changed.emit(symbol.name, symbol.description)

    def _on_color(self, event: Event) -> None:
        color: Color = event.data
        self.color_changed.emit(color.to_hex())

    def _on_tick(self, event: Event) -> None:
        self.elapsed_changed.emit(float(event.data))
