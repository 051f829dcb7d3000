"""Coercion of user-entered numbers and clock strings."""

from __future__ import annotations

import math
import re
from typing import Any

from tripboard.domain.constants import (
    DEFAULT_STAY_MINUTES,
    DEFAULT_TRAVEL_MINUTES,
    MIN_STAY_MINUTES,
    MIN_TRAVEL_MINUTES,
    MINUTES_PER_DAY,
)

_CLOCK_PATTERN = re.compile(r"^(?P<hh>\d{1,2}):(?P<mm>\d{2})$")


def _to_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    text = str(raw or "").strip()
    match = re.match(r"^[+-]?\d+", text)
    if not match:
        return None
    return int(match.group(0))


def coerce_stay_minutes(raw: Any) -> int:
    value = _to_int(raw)
    if value is None:
        return DEFAULT_STAY_MINUTES
    return max(MIN_STAY_MINUTES, value)


def coerce_travel_minutes(raw: Any) -> int:
    value = _to_int(raw)
    if value is None:
        return DEFAULT_TRAVEL_MINUTES
    return max(MIN_TRAVEL_MINUTES, value)


def is_clock(text: str) -> bool:
    match = _CLOCK_PATTERN.match(str(text or "").strip())
    if not match:
        return False
    return int(match.group("hh")) < 24 and int(match.group("mm")) < 60


def parse_clock(text: str) -> int:
    """'HH:MM' -> minute of day."""
    match = _CLOCK_PATTERN.match(str(text or "").strip())
    if not match or not is_clock(text):
        raise ValueError(f"Invalid clock time: {text!r}")
    return int(match.group("hh")) * 60 + int(match.group("mm"))


def format_clock(minutes: int) -> str:
    value = minutes % MINUTES_PER_DAY
    return f"{value // 60:02d}:{value % 60:02d}"


__all__ = [
    "coerce_stay_minutes",
    "coerce_travel_minutes",
    "format_clock",
    "is_clock",
    "parse_clock",
]
