#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion of caller-supplied attribute values into JSON-safe values.

Values the JSON encoder cannot represent are replaced by ``str(value)``; the
conversion never raises and never drops a top-level attribute key. Inside
nested collections, elements that are not loggable at all and mapping entries
with non-string keys are dropped. A container that contains itself is
rendered as a ``<cycle ...>`` marker at the point it repeats.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, FrozenSet, Optional, Union
from uuid import UUID
import math

JSONValue = Union[None, str, int, float, bool, list, dict]

_PRIMITIVES = (str, bool, int, float)
_SEQUENCES = (list, tuple, set, frozenset)
# Not JSON types, but accepted as attribute values and logged as text.
_DESCRIBABLE = (datetime, date, time, timedelta, Decimal, UUID, Enum, PurePath, bytes)


def loggable_value(value: Any) -> Any:
    """Unwrap objects that expose a ``loggable_value`` attribute."""
    if not hasattr(value, "loggable_value"):
        return value
    unwrapped = value.loggable_value
    return unwrapped() if callable(unwrapped) else unwrapped


def is_loggable(value: Any) -> bool:
    if value is None or isinstance(value, _PRIMITIVES + _SEQUENCES + _DESCRIBABLE):
        return True
    if isinstance(value, Mapping):
        return True
    return hasattr(value, "loggable_value")


def describe(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return f"<{type(value).__name__}>"


def validate(value: Any, _seen: Optional[FrozenSet[int]] = None) -> JSONValue:
    value = loggable_value(value)
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, Mapping) or isinstance(value, _SEQUENCES):
        # Containers already on the current path are cycles; render them as text.
        seen = _seen or frozenset()
        if id(value) in seen:
            return f"<cycle {type(value).__name__}>"
        seen = seen | {id(value)}
        if isinstance(value, Mapping):
            return {
                key: validate(item, seen)
                for key, item in value.items()
                if isinstance(key, str) and is_loggable(item)
            }
        return [validate(item, seen) for item in value if is_loggable(item)]
    return describe(value)


def encode(attributes: Mapping[Any, Any]) -> Dict[str, JSONValue]:
    encoded: Dict[str, JSONValue] = {}
    for key, value in attributes.items():
        try:
            encoded[str(key)] = validate(value)
        except RecursionError:
            encoded[str(key)] = f"<{type(value).__name__}>"
    return encoded


__all__ = ["JSONValue", "loggable_value", "is_loggable", "describe", "validate", "encode"]
