"""Text helpers shared by config loading.

There are two boolean parsers: values read from the external
store use the lenient ``is_truthy``; environment overrides use the strict
``is_env_truthy``.
"""
from __future__ import annotations

from typing import Optional

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})


def is_truthy(value: Optional[str]) -> bool:
    """Return True for ``true``/``1``/``yes``/``on`` (case-insensitive, trimmed)."""
    if value is None:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def is_env_truthy(value: Optional[str]) -> bool:
    """Strict parser for environment overrides: ``"1"`` or ``"true"`` in any case."""
    if value is None:
        return False
    return value == "1" or value.lower() == "true"


__all__ = [
    "TRUTHY_VALUES",
    "is_truthy",
    "is_env_truthy",
]
