"""
Event system implementation for SymbolCycler.

Publish-subscribe hub between the animation engine and whatever renders its
snapshots. The engine never imports a UI toolkit; views subscribe here (or
through engine.qt_bridge) instead.
"""
from typing import Any, Callable, Dict, List, Optional
import threading
from collections import defaultdict
from core.logging.logger import get_logger, is_verbose_logging
from core.events.event_types import Event, Subscription

logger = get_logger(__name__)


class EventSystem:
    """
    Priority-ordered publish/subscribe dispatcher.

    Subscriber lists are copied under the lock and invoked outside it, so a
    handler may subscribe, unsubscribe or publish without deadlocking. A
    failing handler is logged and does not stop delivery to the rest.
    """

    def __init__(self, max_history: int = 256):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._subscription_map: Dict[str, Subscription] = {}
        self._event_history: List[Event] = []
        self._max_history = max(0, int(max_history))
        self._lock = threading.RLock()

        logger.debug("[EVENTS] EventSystem initialized (history=%d)", self._max_history)

    def subscribe(
        self,
        event_type: str,
        callback: Callable[[Event], None],
        priority: int = 50,
        filter_fn: Optional[Callable[[Event], bool]] = None,
    ) -> str:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Type of event to subscribe to (see EventType)
            callback: Function called with the Event when published
            priority: Higher values are called earlier, default 50
            filter_fn: Optional predicate; callback runs only when it passes

        Returns:
            str: Subscription ID for unsubscribing

        Raises:
            ValueError: If callback is not callable or event_type is empty
        """
        if not callable(callback):
            raise ValueError("Callback must be callable")
        if not isinstance(event_type, str) or not event_type.strip():
            raise ValueError("event_type must be a non-empty string")

        subscription = Subscription(callback, event_type, priority, filter_fn)

        with self._lock:
            subs = self._subscriptions[event_type]
            subs.append(subscription)
            # sort() is stable: equal priorities keep subscription order
            subs.sort()
            self._subscription_map[subscription.id] = subscription

        logger.debug("[EVENTS] Subscribed %s to %s (priority=%d)", subscription.id, event_type, priority)
        return subscription.id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Remove a subscription.

        Returns:
            True if the subscription existed, False otherwise
        """
        with self._lock:
            subscription = self._subscription_map.pop(subscription_id, None)
            if subscription is None:
                logger.warning("[EVENTS] Unsubscribe called with unknown id: %s", subscription_id)
                return False

            subscription.active = False
            remaining = [
                s for s in self._subscriptions.get(subscription.event_type, [])
                if s.id != subscription_id
            ]
            if remaining:
                self._subscriptions[subscription.event_type] = remaining
            else:
                self._subscriptions.pop(subscription.event_type, None)

        logger.debug("[EVENTS] Unsubscribed %s", subscription_id)
        return True

    def publish(self, event_type: str, data: Any = None, source: Any = None) -> Event:
        """
        Publish an event to all subscribers of its type.

        Delivery stops early if a handler calls ``event.mark_handled()``.

        Returns:
            Event: The published event object
        """
        if not isinstance(event_type, str) or not event_type.strip():
            raise ValueError("event_type must be a non-empty string")

        event = Event(event_type, data, source)

        with self._lock:
            targets = list(self._subscriptions.get(event_type, ()))
            self._record(event)

        if is_verbose_logging():
            logger.debug("[EVENTS] Publishing %s to %d subscriber(s)", event_type, len(targets))

        for subscription in targets:
            if event.is_handled:
                break
            # Unsubscribed by an earlier handler during this dispatch
            if not subscription.active:
                continue
            try:
                subscription(event)
            except Exception as e:
                logger.error("[EVENTS] Error in handler for %s: %s", event_type, e, exc_info=True)

        return event

    def _record(self, event: Event) -> None:
        if self._max_history == 0:
            return
        self._event_history.append(event)
        overflow = len(self._event_history) - self._max_history
        if overflow > 0:
            del self._event_history[:overflow]

    def get_event_history(self, limit: int = 100, event_type: Optional[str] = None) -> List[Event]:
        """Return up to ``limit`` most recent events, optionally of one type."""
        with self._lock:
            history = self._event_history
            if event_type is not None:
                history = [e for e in history if e.event_type == event_type]
            return list(history[-limit:]) if limit > 0 else []

    def clear(self) -> None:
        """Drop all subscriptions and history."""
        with self._lock:
            for subscription in self._subscription_map.values():
                subscription.active = False
            self._subscriptions.clear()
            self._subscription_map.clear()
            self._event_history.clear()

        logger.debug("[EVENTS] EventSystem cleared")

    def get_subscription_count(self) -> int:
        """Get total number of active subscriptions."""
        with self._lock:
            return len(self._subscription_map)

    def get_subscriptions_for_type(self, event_type: str) -> int:
        """Get number of subscriptions for a specific event type."""
        with self._lock:
            return len(self._subscriptions.get(event_type, []))
