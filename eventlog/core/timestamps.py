from __future__ import annotations

from datetime import datetime
from typing import Any, Optional


def now_local() -> datetime:
    return datetime.now().astimezone()


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so a value survives ``format_timestamp`` unchanged."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def format_timestamp(value: datetime) -> str:
    """Render ``YYYY-MM-DDTHH:MM:SS.mmm+HH:MM``; naive values are taken as local time.

    Microseconds below the millisecond are cut, not rounded. Event and
    creation times are truncated with ``truncate_to_millis`` when recorded, so
    offsets computed from a reloaded log match the live one.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat(timespec="milliseconds")


def parse_timestamp(text: Any) -> Optional[datetime]:
    if not isinstance(text, str):
        return None
    raw = text.strip()
    if not raw:
        return None
    if raw.endswith("Z") or raw.endswith("z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


__all__ = ["now_local", "truncate_to_millis", "format_timestamp", "parse_timestamp"]
