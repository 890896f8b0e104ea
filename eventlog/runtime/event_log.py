#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
EventLog: an ordered, named sequence of events with timeline and JSON export.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union
import json
import logging
import threading

from eventlog.core.event import Clock, Event, EventKeys, EventMessage
from eventlog.core.offset import format_time_offset
from eventlog.core.timestamps import format_timestamp, now_local, truncate_to_millis
from eventlog.ui.console import ConsoleSink, PlainConsoleSink

if TYPE_CHECKING:
    from eventlog.runtime.store import EventLogStore

logger = logging.getLogger(__name__)


class EventLog:
    def __init__(
        self,
        name: str,
        *,
        creation_time: Optional[datetime] = None,
        events: Optional[Sequence[Event]] = None,
        store: Optional["EventLogStore"] = None,
        clock: Optional[Clock] = None,
        sink: Optional[ConsoleSink] = None,
        console_logging_enabled: bool = True,
        persisted: bool = True,
    ):
        self.name = name
        self.store = store
        self.clock: Clock = clock or (store.clock if store is not None else now_local)
        self.sink: ConsoleSink = sink or (store.sink if store is not None else PlainConsoleSink())
        self.creation_time = creation_time or truncate_to_millis(self.clock())
        self.events: List[Event] = list(events or [])
        self.console_logging_enabled = console_logging_enabled
        self.persisted = persisted
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self.events))

    def __repr__(self) -> str:
        return f"EventLog(name={self.name!r}, events={len(self.events)})"

    def add(
        self,
        title: str,
        attributes: Optional[Mapping[str, Any]] = None,
        string_value: Optional[str] = None,
    ) -> Event:
        with self._lock:
            event = Event.create(title, attributes, string_value, clock=self.clock)
            self.events.append(event)
        if self.console_logging_enabled:
            self.sink.emit(self.name, self.offset_for(event), event.string_value)
        self.save()
        return event

    def add_message(
        self,
        message: EventMessage,
        attributes: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Event]:
        """Add ``message`` unless its ``should_add`` declines; caller attributes win over the message's."""
        if not message.should_add():
            return None
        merged: Dict[str, Any] = dict(message.attributes)
        if attributes:
            merged.update(attributes)
        event = self.add(message.title, merged, message.string_value)
        message.after_add()
        return event

    def events_matching(self, title: Union[str, EventMessage]) -> List[Event]:
        wanted = title if isinstance(title, str) else title.title
        return [event for event in self.snapshot_events() if event.title == wanted]

    def snapshot_events(self) -> List[Event]:
        with self._lock:
            return list(self.events)

    def offset_for(self, event: Event) -> str:
        return format_time_offset(event.offset_since(self.creation_time))

    def to_text(self) -> str:
        return "\n".join(
            f"{self.offset_for(event)}: {event.string_value}" for event in self.snapshot_events()
        )

    def to_dict(self, events: Optional[Sequence[Event]] = None) -> Dict[str, Any]:
        if events is None:
            events = self.snapshot_events()
        entries = []
        for event in events:
            entry = event.to_dict()
            entry[EventKeys.OFFSET] = self.offset_for(event)
            entries.append(entry)
        return {
            "name": self.name,
            "creationTime": format_timestamp(self.creation_time),
            "exportTime": format_timestamp(self.clock()),
            "events": entries,
        }

    def to_json(self, pretty: bool = False, *, events: Optional[Sequence[Event]] = None) -> str:
        """Serialize the log envelope; returns an empty string if it cannot be encoded."""
        try:
            return json.dumps(self.to_dict(events), ensure_ascii=False, indent=2 if pretty else None)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.error("EventLog %s could not be converted to JSON: %s", self.name, exc)
            return ""

    def save(self) -> None:
        if self.store is None:
            return
        self.store.put(self)
        self.save_to_disk()

    def save_to_disk(self) -> bool:
        if not self.persisted or self.store is None:
            return False
        return self.store.schedule_save(self)

    def reset(self) -> None:
        with self._lock:
            self.events.clear()
        if self.store is not None:
            self.store.reset(self.name)


__all__ = ["EventLog"]
