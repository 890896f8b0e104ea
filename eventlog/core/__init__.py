"""Event entity, attribute conversion and time formatting."""

from .attributes import JSONValue, encode, is_loggable, validate
from .event import DEFAULT_LOG_NAME, Clock, Event, EventKeys, EventMessage, decode_flat
from .offset import format_time_offset
from .timestamps import format_timestamp, now_local, parse_timestamp, truncate_to_millis

__all__ = [
    "JSONValue",
    "encode",
    "is_loggable",
    "validate",
    "DEFAULT_LOG_NAME",
    "Clock",
    "Event",
    "EventKeys",
    "EventMessage",
    "decode_flat",
    "format_time_offset",
    "format_timestamp",
    "now_local",
    "parse_timestamp",
    "truncate_to_millis",
]
