"""Round events and the emitter that delivers them."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Round event types, valued by their serialized name."""

    # Round flow
    ROUND_STARTED = "round_started"
    ROUND_RESOLVED = "round_resolved"

    # Cards
    CARD_DEALT = "card_dealt"
    SHOE_SHUFFLED = "shoe_shuffled"

    # Naturals
    DEALER_PEEK = "dealer_peek"
    DEALER_BLACKJACK = "dealer_blackjack"
    PLAYER_BLACKJACK = "player_blackjack"

    # Player actions
    PLAYER_HIT = "player_hit"
    PLAYER_STAND = "player_stand"
    PLAYER_DOUBLE = "player_double"
    PLAYER_SPLIT = "player_split"
    PLAYER_BUSTS = "player_busts"

    # Dealer
    DEALER_REVEALS = "dealer_reveals"
    DEALER_HITS = "dealer_hits"
    DEALER_STANDS = "dealer_stands"
    DEALER_BUSTS = "dealer_busts"

    # Training
    MOVE_GRADED = "move_graded"

    # Errors
    INVALID_ACTION = "invalid_action"


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable round event.

    Events are how the engine reports to whatever presents the round.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.value} {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Event emitter for round events.

    Handlers subscribe to one event type, or to every event with None.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[GameEvent] = []

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when the event occurs
            event_type: Event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and deliver it to its subscribers."""
        self._history.append(event)
        logger.debug("%s", event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """History filtered to one event type."""
        return [e for e in self._history if e.event_type is event_type]

    @property
    def history(self) -> list[GameEvent]:
        """Events emitted so far, oldest first."""
        return self._history.copy()
