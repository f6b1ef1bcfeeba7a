"""Shoe events for observers such as table managers and card counters."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of shoe events."""

    SHOE_BUILT = auto()
    SHOE_SHUFFLED = auto()
    SHOE_RESET = auto()
    CUT_CARD_REACHED = auto()
    CARD_DEALT = auto()
    SHOE_EXHAUSTED = auto()


@dataclass(frozen=True)
class ShoeEvent:
    """
    Immutable shoe event.

    Events let callers watch the shoe (rebuilds, shuffles, dealt cards)
    without reaching into its card sequence.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[ShoeEvent], None]


class EventEmitter:
    """
    Simple event emitter for shoe events.

    Allows subscribing to specific event types or all events. Handler
    failures are logged and never propagate into the shoe.
    """

    def __init__(self, max_history: int | None = 1000) -> None:
        """
        Initialize the event emitter.

        Args:
            max_history: Number of recent events to keep, or None for all
        """
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[ShoeEvent] = deque(maxlen=max_history)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Unsubscribe from events.

        Args:
            handler: Handler to remove
            event_type: Event type to unsubscribe from
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: ShoeEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        self._event_history.append(event)

        for handler in list(self._handlers.get(event.event_type, [])):
            self._dispatch(handler, event)

        # Catch-all handlers
        for handler in list(self._handlers.get(None, [])):
            self._dispatch(handler, event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> ShoeEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = ShoeEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @staticmethod
    def _dispatch(handler: EventHandler, event: ShoeEvent) -> None:
        """Call one handler, logging instead of propagating its failure."""
        try:
            handler(event)
        except Exception:
            logger.exception("Handler %r failed on %s", handler, event.event_type.name)

    @property
    def history(self) -> list[ShoeEvent]:
        """Return the event history."""
        return list(self._event_history)

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
