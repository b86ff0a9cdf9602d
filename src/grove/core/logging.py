"""Process-wide logging setup for the grove CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once, by the entry point.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from grove.core.utils.io import ensure_directory

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_STREAM_HANDLER: Optional[logging.Handler] = None
_FILE_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def _drop(handler: Optional[logging.Handler]) -> None:
    if handler is None:
        return
    root = logging.getLogger()
    root.removeHandler(handler)
    handler.close()


def configure_logging(level: str = "WARNING", log_path: Optional[Path | str] = None) -> None:
    """Install a stderr handler and, optionally, a file handler on the root logger.

    Calling again replaces the handlers installed by the previous call; handlers
    added by anything else are left alone.
    """
    global _STREAM_HANDLER, _FILE_HANDLER

    numeric = _level_from_name(level)
    root = logging.getLogger()
    root.setLevel(numeric)

    _drop(_STREAM_HANDLER)
    _drop(_FILE_HANDLER)
    _STREAM_HANDLER = None
    _FILE_HANDLER = None

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(numeric)
    stream.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(stream)
    _STREAM_HANDLER = stream

    if log_path:
        resolved = Path(log_path).expanduser().resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setLevel(numeric)
        fh.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(fh)
        _FILE_HANDLER = fh


def reset_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by ``configure_logging``."""
    global _STREAM_HANDLER, _FILE_HANDLER
    _drop(_STREAM_HANDLER)
    _drop(_FILE_HANDLER)
    _STREAM_HANDLER = None
    _FILE_HANDLER = None
    logging.getLogger().setLevel(logging.WARNING)


__all__ = ["configure_logging", "reset_logging_for_tests"]
