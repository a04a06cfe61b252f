# tests/test_event_interface.py
import json
from unittest.mock import MagicMock

from rental.events.event_interface import (
    ErrorEvent,
    Event,
    EventEmitter,
    EventType,
    RentalCardEvent,
)


def make_event(event_type=EventType.ITEM_RENTED):
    return RentalCardEvent(
        type=event_type,
        data={"item_no": 1},
        id="evt_1",
        created_at=1700000000,
        rental_card_no="2026-abc",
        member_id="member-1"
    )


def test_event_type_from_string():
    assert EventType.from_string("rental_card.item.returned") == EventType.ITEM_RETURNED
    assert EventType.from_string("no.such.event") == EventType.UNKNOWN


def test_event_round_trip():
    """Serialized rental card events come back as the same subclass"""
    event = make_event()

    data = json.loads(event.to_json())
    assert data["type"] == "rental_card.item.rented"

    restored = Event.from_dict(data)
    assert isinstance(restored, RentalCardEvent)
    assert restored == event


def test_error_event_from_dict():
    restored = Event.from_dict({"type": "error", "error": {"error_type": "RepositoryError"}})

    assert isinstance(restored, ErrorEvent)
    assert restored.error["error_type"] == "RepositoryError"


def test_emit_to_specific_and_wildcard_handlers():
    emitter = EventEmitter()
    rented = MagicMock()
    returned = MagicMock()
    everything = MagicMock()
    emitter.on(EventType.ITEM_RENTED, rented)
    emitter.on("rental_card.item.returned", returned)
    emitter.on_any(everything)

    event = make_event()
    emitter.emit(event)

    rented.assert_called_once_with(event)
    returned.assert_not_called()
    everything.assert_called_once_with(event)


def test_failing_handler_does_not_stop_others():
    emitter = EventEmitter()
    broken = MagicMock(side_effect=RuntimeError("handler failed"))
    healthy = MagicMock()
    emitter.on(EventType.ITEM_OVERDUE, broken)
    emitter.on(EventType.ITEM_OVERDUE, healthy)

    emitter.emit(make_event(EventType.ITEM_OVERDUE))

    broken.assert_called_once()
    healthy.assert_called_once()


def test_off_removes_handlers():
    emitter = EventEmitter()
    handler = MagicMock()
    wildcard = MagicMock()
    emitter.on(EventType.ITEM_RENTED, handler)
    emitter.on_any(wildcard)

    emitter.off(EventType.ITEM_RENTED, handler)
    emitter.off_any(wildcard)
    emitter.emit(make_event())

    handler.assert_not_called()
    wildcard.assert_not_called()

    # Removing an unknown handler is only logged
    emitter.off(EventType.ITEM_RENTED, handler)
    emitter.off_any(wildcard)
