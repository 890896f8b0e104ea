#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Event entity and the EventMessage base class callers subclass to declare
their own kinds of events.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional
import logging

from eventlog.core.attributes import encode
from eventlog.core.timestamps import format_timestamp, now_local, parse_timestamp, truncate_to_millis

DEFAULT_LOG_NAME = "EventLog"

Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


class EventKeys:
    TITLE = "title"
    TIME = "time"
    STRING_VALUE = "stringValue"
    OFFSET = "offset"

    RESERVED = frozenset({TITLE, TIME, STRING_VALUE, OFFSET})


@dataclass(frozen=True)
class Event:
    title: str
    time: datetime
    string_value: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title:
            raise ValueError("Event title must be a non-empty string")
        if not self.string_value:
            object.__setattr__(self, "string_value", self.title)
        reserved = EventKeys.RESERVED.intersection(self.attributes)
        if reserved:
            logger.warning("Dropping reserved attribute keys %s from event %r", sorted(reserved), self.title)
        object.__setattr__(
            self,
            "attributes",
            {key: value for key, value in self.attributes.items() if key not in EventKeys.RESERVED},
        )

    @classmethod
    def create(
        cls,
        title: str,
        attributes: Optional[Mapping[str, Any]] = None,
        string_value: Optional[str] = None,
        *,
        clock: Clock = now_local,
    ) -> "Event":
        return cls(
            title=title,
            time=truncate_to_millis(clock()),
            string_value=string_value or title,
            attributes=dict(attributes or {}),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, clock: Clock = now_local) -> Optional["Event"]:
        """Decode one persisted event; ``None`` when an envelope field is missing."""
        attributes = dict(data)
        title = attributes.pop(EventKeys.TITLE, None)
        string_value = attributes.pop(EventKeys.STRING_VALUE, None)
        time_text = attributes.pop(EventKeys.TIME, None)
        attributes.pop(EventKeys.OFFSET, None)
        if not isinstance(title, str) or not title:
            return None
        if not isinstance(string_value, str) or not isinstance(time_text, str):
            return None
        return cls(
            title=title,
            time=parse_timestamp(time_text) or clock(),
            string_value=string_value,
            attributes=attributes,
        )

    def offset_since(self, start: datetime) -> float:
        return (self.time - start).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        data = encode(self.attributes)
        data[EventKeys.TITLE] = self.title
        data[EventKeys.TIME] = format_timestamp(self.time)
        data[EventKeys.STRING_VALUE] = self.string_value
        return data


def decode_flat(flat: Mapping[str, Any], *, clock: Clock = now_local) -> Optional[Event]:
    """
    Decode an event written by the older flat format, where every attribute
    was stored as a string. A missing or unreadable ``time`` falls back to the
    current time instead of failing.
    """
    values = {str(key): "" if value is None else str(value) for key, value in flat.items()}
    title = values.pop(EventKeys.TITLE, None)
    string_value = values.pop(EventKeys.STRING_VALUE, None)
    time_text = values.pop(EventKeys.TIME, None)
    values.pop(EventKeys.OFFSET, None)
    if not title or string_value is None:
        return None
    return Event(
        title=title,
        time=parse_timestamp(time_text) or clock(),
        string_value=string_value,
        attributes=values,
    )


class EventMessage:
    """
    Base class for caller-declared messages.

    Only ``title`` is required. When mixed into an ``Enum`` with string
    values, the member value is used as the title::

        class Checkout(EventMessage, Enum):
            STARTED = "Checkout started"
            PAID = "Checkout paid"

    Override ``log_name`` (as a property on enums) to file messages into a
    log other than ``EventLog``.
    """

    @property
    def log_name(self) -> str:
        return DEFAULT_LOG_NAME

    @property
    def title(self) -> str:
        if isinstance(self, Enum):
            return str(self.value)
        raise NotImplementedError(f"{type(self).__name__} must define a title")

    @property
    def attributes(self) -> Dict[str, Any]:
        return {}

    @property
    def string_value(self) -> str:
        return self.title

    def should_add(self) -> bool:
        return True

    def after_add(self) -> None:
        return None


__all__ = [
    "DEFAULT_LOG_NAME",
    "Clock",
    "EventKeys",
    "Event",
    "EventMessage",
    "decode_flat",
]
