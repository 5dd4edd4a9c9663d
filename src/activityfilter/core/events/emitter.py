"""
Event Emitter for the Feed Session

Synchronous event broadcasting with observer management, bounded history
and observer error isolation. Delivery happens on the caller's thread, in
subscription order, before emit() returns.
"""

import logging
from collections import defaultdict, deque
from typing import Any, Callable, Dict, List, Optional, Union

from activityfilter.core.events.types import BaseEvent, EventType

logger = logging.getLogger(__name__)

Observer = Callable[[EventType], Any]


class EventEmitter:
    """
    Event emitter with typed and wildcard subscriptions.

    Features:
    - Subscriptions by event class, event class name, or '*' for all events
    - Event history for inspection and replay
    - Observer error isolation: a failing observer is logged and skipped
    """

    def __init__(self, max_history: int = 1000, enable_history: bool = True):
        """
        Initialize the event emitter.

        Args:
            max_history: Maximum number of events to keep in history
            enable_history: Whether to store event history
        """
        self.max_history = max_history
        self.enable_history = enable_history

        self._observers: Dict[str, List[Observer]] = defaultdict(list)
        self._wildcard_observers: List[Observer] = []
        self._event_history: deque = deque(maxlen=max_history if enable_history else 0)

        self._stats = {
            'events_emitted': 0,
            'observers_notified': 0,
            'observer_errors': 0,
        }

    @staticmethod
    def _type_name(event_type: Union[str, type]) -> str:
        if isinstance(event_type, type):
            return event_type.__name__
        return str(event_type)

    def subscribe(self, event_type: Union[str, type], observer: Observer) -> bool:
        """
        Subscribe an observer to events of a specific type.

        Args:
            event_type: Event type to subscribe to (class, name, or '*')
            observer: Callable receiving the event

        Returns:
            True if the observer was added, False if already subscribed
        """
        event_type_str = self._type_name(event_type)
        if event_type_str in ('*', 'all'):
            target = self._wildcard_observers
        else:
            target = self._observers[event_type_str]

        if observer in target:
            return False
        target.append(observer)
        logger.debug(f"Subscribed observer to {event_type_str} events")
        return True

    def unsubscribe(self, event_type: Union[str, type], observer: Observer) -> bool:
        """
        Unsubscribe an observer from events.

        Returns:
            True if the observer was removed
        """
        event_type_str = self._type_name(event_type)
        if event_type_str in ('*', 'all'):
            target = self._wildcard_observers
        else:
            target = self._observers.get(event_type_str, [])

        if observer not in target:
            return False
        target.remove(observer)
        logger.debug(f"Unsubscribed observer from {event_type_str} events")
        return True

    def emit(self, event: EventType) -> int:
        """
        Deliver an event to all subscribed observers.

        Args:
            event: Event instance to emit

        Returns:
            Number of observers notified successfully
        """
        self._stats['events_emitted'] += 1
        if self.enable_history:
            self._event_history.append(event)

        observers = list(self._observers.get(event.event_type, [])) + list(self._wildcard_observers)
        notified = 0
        for observer in observers:
            try:
                observer(event)
            except Exception as e:
                self._stats['observer_errors'] += 1
                logger.error(f"Observer {observer!r} failed on {event.event_type}: {e}")
                continue
            notified += 1
            self._stats['observers_notified'] += 1
        return notified

    def get_event_history(self, event_type: Optional[Union[str, type]] = None,
                          limit: Optional[int] = None) -> List[BaseEvent]:
        """
        Get event history, optionally filtered by type.

        Args:
            event_type: Only return events of this type
            limit: Only return the most recent events

        Returns:
            List of events from history, oldest first
        """
        events = list(self._event_history)
        if event_type is not None:
            name = self._type_name(event_type)
            events = [e for e in events if e.event_type == name]
        if limit is not None:
            events = events[-limit:]
        return events

    def get_statistics(self) -> Dict[str, Any]:
        """Get emitter statistics."""
        return {
            **self._stats,
            'observer_count': sum(len(obs) for obs in self._observers.values()) + len(self._wildcard_observers),
            'history_size': len(self._event_history),
            'history_enabled': self.enable_history,
        }

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._observers.clear()
        self._wildcard_observers.clear()
