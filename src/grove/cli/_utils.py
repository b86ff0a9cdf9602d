"""Shared helpers for CLI command modules."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Tuple

from grove.core.config import ConfigState, GitConfigStore, PrecedenceResolver, UserSettings
from grove.core.logging import configure_logging

logger = logging.getLogger(__name__)


def get_directory(args: argparse.Namespace) -> Path:
    """Project directory from ``--directory`` or the current working directory."""
    value = getattr(args, "directory", None)
    return Path(value).resolve() if value else Path.cwd()


def load_settings(args: argparse.Namespace) -> UserSettings:
    """Settings loaded by the dispatcher, or a fresh load when run standalone.

    Raises:
        ConfigParseError: If the settings file cannot be parsed.
    """
    settings = getattr(args, "_settings", None)
    if settings is None:
        settings = UserSettings.load()
    return settings


def load_state(
    args: argparse.Namespace,
    settings: Optional[UserSettings] = None,
) -> Tuple[ConfigState, PrecedenceResolver]:
    """Resolve the effective project config for ``--directory``.

    Applies environment overrides after resolution, and switches logging to
    DEBUG when the resolved config asks for it.
    """
    settings = settings or load_settings(args)
    directory = get_directory(args)
    state = ConfigState()
    resolver = state.load(directory, GitConfigStore.from_settings(directory, settings))
    state.load_from_environment()
    if state.is_debug():
        configure_logging("DEBUG", settings.log_file)
    return state, resolver


__all__ = ["get_directory", "load_settings", "load_state"]
