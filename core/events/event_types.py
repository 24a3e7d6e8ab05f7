"""
Event type definitions for the symbol animation.
"""
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class Event:
    """Base event class."""
    event_type: str
    data: Any = None
    source: Any = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    timestamp: float = field(default_factory=time.time)
    is_handled: bool = False

    def mark_handled(self):
        """Mark this event as handled."""
        self.is_handled = True


@dataclass
class Subscription:
    """Subscription to an event type."""
    callback: Callable[[Event], None]
    event_type: str
    priority: int = 0
    filter_fn: Optional[Callable[[Event], bool]] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    active: bool = True

    def __call__(self, event: Event) -> None:
        """Call the subscription callback if filter passes."""
        if self.filter_fn is None or self.filter_fn(event):
            self.callback(event)

    def __lt__(self, other: 'Subscription') -> bool:
        """Sort by priority (higher first)."""
        return self.priority > other.priority


class EventType:
    """Event type constants published by the animation engine."""
    # Lifecycle
    ENGINE_STARTED = "engine.started"
    ENGINE_STOPPED = "engine.stopped"

    # Structural changes
    SYMBOL_CHANGED = "symbol.changed"
    PHASE_CHANGED = "phase.changed"
    COLOR_CHANGED = "color.changed"

    # Free-running elapsed-time clock
    CLOCK_TICK = "clock.tick"

    # Published after every mutation with the fresh AnimationState
    STATE_CHANGED = "state.changed"
