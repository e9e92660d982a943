"""
Event bus for interplay progression changes.

Lets audit/history views react to score changes without the managers
knowing who is listening.

Usage:
    from .event_bus import get_event_bus, EventType

    bus = get_event_bus()
    bus.on(EventType.TRACK_CHANGED, my_handler)

    # Emitted by managers when a score changes
    bus.emit(EventType.TRACK_CHANGED, category="prestige", track_id="valor", change=5)

    def my_handler(event: GameEvent):
        print(f"Track {event.data['track_id']} changed!")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Progression events that can be published."""

    TRACK_CHANGED = "track.changed"
    COUNTER_EFFECT = "track.counter_effect"
    DECAY_APPLIED = "track.decay_applied"
    TRACKS_UPDATED = "track.definitions_updated"
    INTERACTION_COMPLETED = "interaction.completed"


@dataclass
class GameEvent:
    """
    Event payload for the event bus.

    Attributes:
        type: The event type (from EventType enum)
        data: Event-specific payload as dict
        player_id: Player the event belongs to (optional)
        timestamp: When the event was emitted
    """

    type: EventType
    data: dict = field(default_factory=dict)
    player_id: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """
    Synchronous event bus.

    Listeners are called immediately on emit(), on the caller's stack.
    No priority, no async, no middleware.
    """

    def __init__(self, history_limit: int = 100):
        self._listeners: dict[EventType, list[EventHandler]] = {}
        self._history: list[GameEvent] = []
        self._history_limit = history_limit

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        if handler not in self._listeners[event_type]:
            self._listeners[event_type].append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe from an event type."""
        if event_type in self._listeners and handler in self._listeners[event_type]:
            self._listeners[event_type].remove(handler)

    def emit(self, event_type: EventType, player_id: str = "", **data) -> GameEvent:
        """
        Emit an event to all subscribers.

        Args:
            event_type: The type of event
            player_id: Player context (optional)
            **data: Event-specific data

        Returns:
            The emitted GameEvent
        """
        event = GameEvent(type=event_type, data=data, player_id=player_id)

        self._history.append(event)
        if len(self._history) > self._history_limit:
            self._history = self._history[-self._history_limit :]

        for handler in list(self._listeners.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                # One bad listener must not break the change that triggered it
                logger.exception(f"Error in handler for {event_type.value}")

        return event

    def clear(self) -> None:
        """Clear all listeners and history. Useful for testing."""
        self._listeners.clear()
        self._history.clear()

    def get_history(self, event_type: EventType | None = None) -> list[GameEvent]:
        """Recent events, optionally filtered by type."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if e.type == event_type]

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the process-wide event bus, creating it on first use."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Drop the process-wide bus. Used by tests for isolation."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
