"""In-process named event logs with timeline rendering and JSON snapshots."""

from .config import EventLogConfig
from .core import (
    DEFAULT_LOG_NAME,
    Event,
    EventKeys,
    EventMessage,
    decode_flat,
    encode,
    format_time_offset,
    validate,
)
from .runtime import (
    BackgroundWriter,
    EventLog,
    EventLogStore,
    LocalFileStorage,
    add,
    default_store,
    get,
    reset,
    set_default_store,
)

__all__ = [
    "EventLogConfig",
    "DEFAULT_LOG_NAME",
    "Event",
    "EventKeys",
    "EventMessage",
    "decode_flat",
    "encode",
    "format_time_offset",
    "validate",
    "BackgroundWriter",
    "EventLog",
    "EventLogStore",
    "LocalFileStorage",
    "add",
    "default_store",
    "get",
    "reset",
    "set_default_store",
]
