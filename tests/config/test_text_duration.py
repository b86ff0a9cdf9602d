from __future__ import annotations

from datetime import timedelta

import pytest

from grove.core.utils.duration import parse_duration
from grove.core.utils.text import is_env_truthy, is_truthy


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " TrUe ", "yes", "on", "\tON\n"])
def test_truthy_values(value: str) -> None:
    assert is_truthy(value) is True


@pytest.mark.parametrize("value", ["0", "false", "no", "off", "", "   ", "enabled", "y", None])
def test_falsy_values(value) -> None:
    assert is_truthy(value) is False


def test_env_parser_is_stricter() -> None:
    assert is_env_truthy("1")
    assert is_env_truthy("tRuE")
    assert not is_env_truthy("yes")
    assert not is_env_truthy("on")
    assert not is_env_truthy(" true")
    assert not is_env_truthy(None)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("30d", timedelta(days=30)),
        ("2w", timedelta(days=14)),
        ("6m", timedelta(days=180)),
        (" 1D ", timedelta(days=1)),
    ],
)


def test_parse_duration(value: str, expected: timedelta) -> None:
    assert parse_duration(value) == expected


@pytest.mark.parametrize(
    "value, message",
    [
        ("", "cannot be empty"),
        ("d", "invalid duration"),
        ("xd", "invalid duration number"),
        ("-3d", "invalid duration number"),
        ("0w", "must be positive"),
        ("5y", "unknown duration unit"),
    ],
)


def test_parse_duration_rejects(value: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_duration(value)
