from __future__ import annotations

import logging
from pathlib import Path

from grove.core.logging import configure_logging, reset_logging_for_tests


def test_reconfiguring_replaces_own_handler() -> None:
    root = logging.getLogger()
    before = list(root.handlers)

    configure_logging("INFO")
    configure_logging("DEBUG")

    added = [h for h in root.handlers if h not in before]
    assert len(added) == 1
    assert added[0].level == logging.DEBUG
    assert root.level == logging.DEBUG


def test_unknown_level_falls_back_to_warning() -> None:
    configure_logging("chatty")

    assert logging.getLogger().level == logging.WARNING


def test_file_handler_receives_records(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "grove.log"
    configure_logging("INFO", log_path)

    logging.getLogger("grove.test").info("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert "INFO grove.test: hello from test" in text


def test_reset_removes_installed_handlers(tmp_path: Path) -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    configure_logging("DEBUG", tmp_path / "grove.log")

    reset_logging_for_tests()

    assert [h for h in root.handlers if h not in before] == []
