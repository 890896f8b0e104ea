#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Process-wide registry of event logs with load-or-create from disk snapshots.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import json
import logging
import threading

from pydantic import ValidationError

from eventlog.config import EventLogConfig
from eventlog.core.event import Clock, Event, EventMessage, decode_flat
from eventlog.core.timestamps import now_local, parse_timestamp, truncate_to_millis
from eventlog.runtime.event_log import EventLog
from eventlog.runtime.snapshot import EventLogSnapshot
from eventlog.runtime.storage import FileStorage, LocalFileStorage, log_name_from_filename, snapshot_filename
from eventlog.runtime.writer import BackgroundWriter
from eventlog.ui.console import ConsoleSink, NullSink, create_sink

logger = logging.getLogger(__name__)


class EventLogStore:
    """
    Holds the canonical in-memory EventLog for each name.

    ``get`` returns the registered instance, else the log restored from its
    snapshot, else a new empty log. Snapshot writes run on a background
    writer and are best effort.
    """

    def __init__(
        self,
        storage: Optional[FileStorage] = None,
        *,
        writer: Optional[BackgroundWriter] = None,
        clock: Clock = now_local,
        sink: Optional[ConsoleSink] = None,
        console_logging: bool = True,
        persisted: bool = True,
    ):
        self.storage = storage
        self.writer = writer or BackgroundWriter()
        self.clock = clock
        self.sink = sink or NullSink()
        self.console_logging = console_logging
        self.persisted = persisted
        self._logs: Dict[str, EventLog] = {}
        self._lock = threading.RLock()
        # Bumped on reset so writes queued before it are discarded.
        self._generations: Dict[str, int] = {}
        self._io_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[EventLogConfig] = None, **kwargs: Any) -> "EventLogStore":
        config = config or EventLogConfig.from_env_or_file()
        config.apply_env_fallbacks()
        kwargs.setdefault("storage", LocalFileStorage(config.storage_root or Path(".")))
        kwargs.setdefault("writer", BackgroundWriter(maxsize=config.writer_queue_size))
        kwargs.setdefault("sink", create_sink(config.console or "plain"))
        kwargs.setdefault("console_logging", bool(config.console_logging))
        kwargs.setdefault("persisted", bool(config.persisted))
        return cls(**kwargs)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._logs

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._logs)

    def get(self, name: str) -> EventLog:
        with self._lock:
            existing = self._logs.get(name)
            if existing is not None:
                return existing
            log = self.load_from_disk(name)
            if log is None:
                log = self._new_log(name, creation_time=truncate_to_millis(self.clock()), events=[])
                logger.debug("Created event log %s", name)
            self._logs[name] = log
            return log

    def put(self, log: EventLog) -> None:
        with self._lock:
            self._logs[log.name] = log

    def remove(self, name: str) -> None:
        with self._lock:
            self._logs.pop(name, None)

    def reset(self, name: str) -> None:
        with self._lock:
            log = self._logs.pop(name, None)
            self._generations[name] = self._generations.get(name, 0) + 1
        if log is not None:
            log.events.clear()
        if self.storage is None:
            return
        with self._io_lock:
            try:
                self.storage.delete(snapshot_filename(name))
            except FileNotFoundError:
                pass
            except (OSError, ValueError) as exc:
                logger.warning("EventLog %s could not remove its saved file: %s", name, exc)

    def schedule_save(self, log: EventLog) -> bool:
        if self.storage is None or not log.persisted:
            return False
        events = log.snapshot_events()
        with self._lock:
            generation = self._generations.get(log.name, 0)

        def _write() -> None:
            self._write_snapshot(log, events, generation)

        return self.writer.submit(_write)

    def flush(self, timeout: Optional[float] = None) -> bool:
        return self.writer.flush(timeout)

    def close(self) -> None:
        self.writer.close()

    def saved_names(self) -> List[str]:
        if self.storage is None:
            return []
        try:
            keys = self.storage.list_keys()
        except OSError as exc:
            logger.warning("Could not list saved event logs: %s", exc)
            return []
        names = [log_name_from_filename(key) for key in keys]
        return [name for name in names if name]

    def load_from_disk(self, name: str) -> Optional[EventLog]:
        if self.storage is None:
            return None
        try:
            text = self.storage.read_text(snapshot_filename(name))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("EventLog %s could not read its saved file: %s", name, exc)
            return None
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.warning("EventLog %s saved file is not valid JSON: %s", name, exc)
            return None
        if isinstance(data, list):
            return self._load_legacy(name, data)
        if not isinstance(data, dict):
            logger.warning("EventLog %s saved file has an unexpected layout", name)
            return None
        try:
            snapshot = EventLogSnapshot.model_validate(data)
        except ValidationError as exc:
            logger.warning("EventLog %s saved file failed validation: %s", name, exc)
            return None

        creation_time = parse_timestamp(snapshot.creation_time) or self.clock()
        events: List[Event] = []
        skipped = 0
        for entry in snapshot.events:
            event = Event.from_dict(entry, clock=self.clock) if isinstance(entry, dict) else None
            if event is None:
                skipped += 1
                continue
            events.append(event)
        if skipped:
            logger.debug("EventLog %s skipped %d unreadable events", name, skipped)
        return self._new_log(name, creation_time=creation_time, events=events)

    def _load_legacy(self, name: str, entries: List[Any]) -> EventLog:
        events: List[Event] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                continue
            event = decode_flat(entry, clock=self.clock)
            if event is not None:
                events.append(event)
        creation_time = min((event.time for event in events), default=None) or self.clock()
        return self._new_log(name, creation_time=creation_time, events=events)

    def _new_log(self, name: str, *, creation_time: Any, events: List[Event]) -> EventLog:
        return EventLog(
            name,
            creation_time=creation_time,
            events=events,
            store=self,
            console_logging_enabled=self.console_logging,
            persisted=self.persisted,
        )

    def _write_snapshot(self, log: EventLog, events: List[Event], generation: int) -> None:
        text = log.to_json(events=events)
        if not text:
            return
        with self._io_lock:
            with self._lock:
                current = self._generations.get(log.name, 0)
            if current != generation:
                return
            try:
                self.storage.write_text(snapshot_filename(log.name), text)
            except (OSError, ValueError) as exc:
                logger.warning("EventLog %s could not write JSON to disk: %s", log.name, exc)


_default_store: Optional[EventLogStore] = None
_default_lock = threading.Lock()


def default_store() -> EventLogStore:
    global _default_store
    with _default_lock:
        if _default_store is None:
            _default_store = EventLogStore.from_config()
        return _default_store


def set_default_store(store: Optional[EventLogStore]) -> Optional[EventLogStore]:
    """Replace the process-wide store; returns the previous one."""
    global _default_store
    with _default_lock:
        previous = _default_store
        _default_store = store
        return previous


def get(name: str, *, store: Optional[EventLogStore] = None) -> EventLog:
    return (store or default_store()).get(name)


def reset(name: str, *, store: Optional[EventLogStore] = None) -> None:
    (store or default_store()).reset(name)


def add(
    message: EventMessage,
    attributes: Optional[Mapping[str, Any]] = None,
    *,
    store: Optional[EventLogStore] = None,
) -> Optional[Event]:
    """Add ``message`` to the log named by ``message.log_name``."""
    return get(message.log_name, store=store).add_message(message, attributes)


__all__ = [
    "EventLogStore",
    "default_store",
    "set_default_store",
    "get",
    "reset",
    "add",
]
