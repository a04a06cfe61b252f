"""
Event interface for the rental card service.

This module defines the domain events published after a rental card
operation has been committed, and the in-process event bus that delivers
them to subscribers (point bookkeeping, catalog availability, audit logs).
"""

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from rental.config.logging_config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """Types of events that can be emitted by the event bus."""

    # Card lifecycle
    RENTAL_CARD_CREATED = "rental_card.created"

    # Loan events
    ITEM_RENTED = "rental_card.item.rented"
    ITEM_RETURNED = "rental_card.item.returned"
    ITEM_OVERDUE = "rental_card.item.overdue"

    # Late fee events
    LATE_FEE_DEDUCTED = "rental_card.late_fee.deducted"
    OVERDUE_CLEARED = "rental_card.overdue.cleared"

    ERROR = "error"

    # Catch-all for unknown events
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, event_type_str: str) -> 'EventType':
        """Convert a string to an EventType enum value."""
        try:
            return next(e for e in cls if e.value == event_type_str)
        except StopIteration:
            logger.warning(f"Unknown event type: {event_type_str}")
            return cls.UNKNOWN


@dataclass
class Event:
    """Base class for all events in the system."""

    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a dictionary."""
        result = asdict(self)
        result['type'] = self.type.value
        return result

    def to_json(self) -> str:
        """Convert the event to a JSON string."""
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """Create an event from a dictionary."""
        event_type = EventType.from_string(data.get('type', 'unknown'))

        if event_type in RENTAL_CARD_EVENT_TYPES:
            return RentalCardEvent(
                type=event_type,
                data=data.get('data', {}),
                id=data.get('id'),
                created_at=data.get('created_at'),
                rental_card_no=data.get('rental_card_no'),
                member_id=data.get('member_id')
            )
        elif event_type == EventType.ERROR:
            return ErrorEvent(
                type=event_type,
                data=data.get('data', {}),
                id=data.get('id'),
                created_at=data.get('created_at'),
                error=data.get('error', {})
            )
        else:
            return cls(
                type=event_type,
                data=data.get('data', {}),
                id=data.get('id'),
                created_at=data.get('created_at')
            )


@dataclass
class RentalCardEvent(Event):
    """Events about a single rental card."""

    rental_card_no: Optional[str] = None
    member_id: Optional[str] = None


@dataclass
class ErrorEvent(Event):
    """Error events."""

    error: Dict[str, Any] = field(default_factory=dict)


RENTAL_CARD_EVENT_TYPES = {
    EventType.RENTAL_CARD_CREATED,
    EventType.ITEM_RENTED,
    EventType.ITEM_RETURNED,
    EventType.ITEM_OVERDUE,
    EventType.LATE_FEE_DEDUCTED,
    EventType.OVERDUE_CLEARED
}


# Type for event handlers
EventHandlerType = Callable[[Event], None]


class EventEmitter:
    """
    Event emitter for publishing and subscribing to events.

    This class provides methods for registering event handlers and
    emitting events to all registered handlers.
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._handlers: Dict[EventType, List[EventHandlerType]] = {}
        self._wildcard_handlers: List[EventHandlerType] = []

    def on(self, event_type: Union[EventType, str], handler: EventHandlerType) -> None:
        """
        Register a handler for a specific event type.

        Args:
            event_type: The type of event to handle
            handler: The callback function to invoke when the event occurs
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)

        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Registered handler for event type: {event_type.value}")

    def on_any(self, handler: EventHandlerType) -> None:
        """
        Register a handler for all event types.

        Args:
            handler: The callback function to invoke when any event occurs
        """
        self._wildcard_handlers.append(handler)
        logger.debug("Registered wildcard event handler")

    def off(self, event_type: Union[EventType, str], handler: Optional[EventHandlerType] = None) -> None:
        """
        Remove a handler for a specific event type.

        Args:
            event_type: The type of event
            handler: The handler to remove. If None, removes all handlers for the event type.
        """
        if isinstance(event_type, str):
            event_type = EventType.from_string(event_type)

        if event_type in self._handlers:
            if handler is None:
                self._handlers[event_type] = []
                logger.debug(f"Removed all handlers for event type: {event_type.value}")
            else:
                try:
                    self._handlers[event_type].remove(handler)
                    logger.debug(f"Removed handler for event type: {event_type.value}")
                except ValueError:
                    logger.warning(f"Handler not found for event type: {event_type.value}")

    def off_any(self, handler: Optional[EventHandlerType] = None) -> None:
        """
        Remove a wildcard handler.

        Args:
            handler: The handler to remove. If None, removes all wildcard handlers.
        """
        if handler is None:
            self._wildcard_handlers = []
            logger.debug("Removed all wildcard handlers")
        else:
            try:
                self._wildcard_handlers.remove(handler)
                logger.debug("Removed wildcard handler")
            except ValueError:
                logger.warning("Wildcard handler not found")

    def emit(self, event: Event) -> None:
        """
        Emit an event to all registered handlers.

        A failing handler is logged and does not prevent the others from running.

        Args:
            event: The event to emit
        """
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type.value}: {str(e)}")

        for handler in list(self._wildcard_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in wildcard event handler for {event.type.value}: {str(e)}")


# Global event emitter instance
event_bus = EventEmitter()
