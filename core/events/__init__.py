"""Event system for the symbol animation."""

from .event_system import EventSystem
from .event_types import Event, EventType, Subscription

__all__ = ['EventSystem', 'Event', 'EventType', 'Subscription']
