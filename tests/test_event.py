from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest

from eventlog.core.event import DEFAULT_LOG_NAME, Event, EventKeys, EventMessage, decode_flat
from eventlog.core.timestamps import format_timestamp, parse_timestamp


class Door(EventMessage, Enum):
    OPENED = "Door opened"
    CLOSED = "Door closed"


class Untitled(EventMessage):
    pass


def test_event_defaults_string_value_to_title(clock) -> None:
    event = Event.create("Launched", clock=clock)
    assert event.string_value == "Launched"
    assert event.time == clock.now
    assert event.attributes == {}


def test_event_rejects_empty_title(clock) -> None:
    with pytest.raises(ValueError):
        Event.create("", clock=clock)


def test_event_strips_reserved_attribute_keys(clock) -> None:
    event = Event.create("Saved", {"title": "x", "time": "y", "stringValue": "z", "offset": "1.00", "id": 4}, clock=clock)
    assert event.attributes == {"id": 4}


def test_event_round_trips_through_dict(clock) -> None:
    event = Event.create("Paid", {"amount": 12.5, "items": ["tea"]}, "Paid 12.5", clock=clock)
    data = event.to_dict()
    assert data[EventKeys.TIME] == format_timestamp(clock.now)

    decoded = Event.from_dict(data, clock=clock)
    assert decoded is not None
    assert decoded.title == "Paid"
    assert decoded.string_value == "Paid 12.5"
    assert decoded.attributes == {"amount": 12.5, "items": ["tea"]}
    assert decoded.time == clock.now


def test_from_dict_requires_envelope_fields(clock) -> None:
    assert Event.from_dict({"time": "2024-03-01T09:30:00.000+02:00", "stringValue": "x"}, clock=clock) is None
    assert Event.from_dict({"title": "A", "time": "2024-03-01T09:30:00.000+02:00"}, clock=clock) is None
    assert Event.from_dict({"title": "A", "stringValue": "A"}, clock=clock) is None


def test_from_dict_bad_time_falls_back_to_clock(clock) -> None:
    event = Event.from_dict({"title": "A", "stringValue": "A", "time": "yesterday", "offset": "1.00"}, clock=clock)
    assert event is not None
    assert event.time == clock.now
    assert "offset" not in event.attributes


def test_decode_flat_legacy_event(clock) -> None:
    event = decode_flat({"title": "A", "stringValue": "[error] A", "count": 3}, clock=clock)
    assert event is not None
    assert event.time == clock.now
    assert event.attributes == {"count": "3"}
    assert decode_flat({"stringValue": "x"}, clock=clock) is None
    assert decode_flat({"title": "A"}, clock=clock) is None


def test_timestamp_format_round_trips() -> None:
    moment = datetime(2024, 3, 1, 9, 30, 5, 123456, tzinfo=timezone(timedelta(hours=-5)))
    text = format_timestamp(moment)
    assert text == "2024-03-01T09:30:05.123-05:00"
    assert format_timestamp(parse_timestamp(text)) == text
    assert parse_timestamp("2024-03-01T09:30:05.123Z") == datetime(2024, 3, 1, 9, 30, 5, 123000, tzinfo=timezone.utc)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None


def test_message_defaults() -> None:
    assert Door.OPENED.title == "Door opened"
    assert Door.OPENED.string_value == "Door opened"
    assert Door.OPENED.log_name == DEFAULT_LOG_NAME
    assert Door.OPENED.attributes == {}
    assert Door.OPENED.should_add() is True
    assert Door.OPENED.after_add() is None
    with pytest.raises(NotImplementedError):
        Untitled().title
