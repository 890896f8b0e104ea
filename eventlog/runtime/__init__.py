#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Runtime pieces: the EventLog aggregate, its registry, storage and writer."""

from .event_log import EventLog
from .snapshot import EventLogSnapshot
from .storage import FileStorage, LocalFileStorage, snapshot_filename
from .store import EventLogStore, add, default_store, get, reset, set_default_store
from .writer import BackgroundWriter

__all__ = [
    "EventLog",
    "EventLogSnapshot",
    "FileStorage",
    "LocalFileStorage",
    "snapshot_filename",
    "EventLogStore",
    "add",
    "default_store",
    "get",
    "reset",
    "set_default_store",
    "BackgroundWriter",
]
