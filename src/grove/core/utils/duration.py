"""Human-friendly durations used by stale thresholds (``30d``, ``2w``, ``6m``)."""
from __future__ import annotations

from datetime import timedelta

_UNIT_DAYS = {
    "d": 1,
    "w": 7,
    # Months are a fixed 30 days.
    "m": 30,
}


def parse_duration(value: str) -> timedelta:
    """Parse ``<positive int><d|w|m>`` into a timedelta.

    Raises:
        ValueError: If the value is empty, malformed, non-positive or uses an
            unknown unit.
    """
    s = (value or "").strip().lower()
    if not s:
        raise ValueError("duration cannot be empty")
    if len(s) < 2:
        raise ValueError(f"invalid duration: {s}")

    unit = s[-1]
    number = s[:-1]
    if not number.isdigit():
        raise ValueError(f"invalid duration number: {s}")

    count = int(number)
    if count <= 0:
        raise ValueError(f"duration must be positive: {s}")

    days = _UNIT_DAYS.get(unit)
    if days is None:
        raise ValueError(f"unknown duration unit: {unit} (use d, w, or m)")
    return timedelta(days=count * days)


__all__ = ["parse_duration"]
