#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compact rendering of elapsed time, e.g. ``1:01.01`` or ``1d+00:00:00.00``.
"""
from __future__ import annotations

import math

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

# Added before rounding so exact halves (1.015) are not lost to float truncation.
_ROUNDING_EPSILON = 0.001
_STRIPPABLE = frozenset("0:d+")


def split_offset(total_seconds: float) -> tuple[int, int, int, int, int]:
    """Return ``(days, hours, minutes, seconds, hundredths)`` for a non-negative offset."""
    total_seconds = max(0.0, float(total_seconds))
    whole = int(math.floor(total_seconds))
    hundredths = int(math.floor((total_seconds - whole) * 100 + _ROUNDING_EPSILON + 0.5))
    if hundredths >= 100:
        whole += 1
        hundredths -= 100
    days, rem = divmod(whole, SECONDS_PER_DAY)
    hours, rem = divmod(rem, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rem, SECONDS_PER_MINUTE)
    return days, hours, minutes, seconds, hundredths


def format_time_offset(total_seconds: float) -> str:
    """
    Format an elapsed time in seconds as ``Dd+HH:MM:SS.ss`` with leading zero
    units trimmed. Seconds and hundredths are always kept, so ``0`` renders as
    ``0.00``.
    """
    days, hours, minutes, seconds, hundredths = split_offset(total_seconds)
    text = "%dd+%02d:%02d:%02d.%02d" % (days, hours, minutes, seconds, hundredths)

    index = 0
    while text[index] in _STRIPPABLE:
        index += 1
    if text[index] == ".":
        index -= 1
    return text[index:]


__all__ = ["format_time_offset", "split_offset"]
