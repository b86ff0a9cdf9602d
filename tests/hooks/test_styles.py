from __future__ import annotations

from grove.core import styles


def test_plain_is_identity() -> None:
    assert styles.dimmed("text", plain=True) == "text"
    assert styles.bold("text", plain=True) == "text"


def test_styled_text_is_wrapped_and_reset() -> None:
    assert styles.dimmed("x") == "\033[2mx\033[0m"
    assert styles.failure("x").endswith(styles.Colors.RESET)


def test_empty_text_is_untouched() -> None:
    assert styles.render("", styles.Colors.BOLD) == ""
