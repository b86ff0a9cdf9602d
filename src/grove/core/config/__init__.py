"""Grove configuration: project file, external store, precedence and settings."""
from __future__ import annotations

from grove.core.config.defaults import Defaults, load_defaults
from grove.core.config.external import ExternalStore, GitConfigStore
from grove.core.config.file import FILE_NAME, FileConfig, FileConfigStore
from grove.core.config.paths import find_settings_file, list_config_paths
from grove.core.config.precedence import SETTINGS, PrecedenceResolver, Source
from grove.core.config.settings import UserSettings
from grove.core.config.state import ConfigState, EffectiveConfig
from grove.core.config.validation import ValidationIssue, validate_all

__all__ = [
    "Defaults",
    "load_defaults",
    "ExternalStore",
    "GitConfigStore",
    "FILE_NAME",
    "FileConfig",
    "FileConfigStore",
    "find_settings_file",
    "list_config_paths",
    "SETTINGS",
    "PrecedenceResolver",
    "Source",
    "UserSettings",
    "ConfigState",
    "EffectiveConfig",
    "ValidationIssue",
    "validate_all",
]
