"""Tool-level user settings.

These are separate from the per-project ``.grove.yaml``: they tune the tool
itself (output format, git timeouts, retry policy, logging) and are read from
the first ``config.yaml`` found on the settings search path. Values missing
from the file fall back to the bundled defaults section by section.
"""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from grove.core.config.defaults import settings_defaults
from grove.core.config.paths import find_settings_file
from grove.core.config.validation import ValidationIssue, validate_settings
from grove.core.exceptions import ConfigParseError, ConfigValidationError
from grove.core.utils.io import read_yaml
from grove.core.utils.merge import deep_merge

logger = logging.getLogger(__name__)


class UserSettings:
    """Merged view of bundled defaults and the user's settings file."""

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None, source_path: Optional[Path] = None) -> None:
        self.source_path = source_path
        self._data: Dict[str, Any] = deep_merge(settings_defaults(), dict(overrides or {}))

    @classmethod
    def load(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ) -> "UserSettings":
        """Discover and load the settings file; defaults only when none exists.

        Raises:
            ConfigParseError: If the discovered file is not valid YAML or not a mapping.
        """
        path = find_settings_file(environ, cwd)
        if path is None:
            logger.debug("No settings file found; using defaults")
            return cls()
        return cls.from_file(path)

    @classmethod
    def from_file(cls, path: Path | str) -> "UserSettings":
        path = Path(path)
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigParseError(path, str(exc)) from exc
        if not isinstance(data, dict):
            raise ConfigParseError(path, f"top level must be a mapping, got {type(data).__name__}")
        logger.debug("Loaded settings from %s", path)
        return cls(data, source_path=path)

    @property
    def raw(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def _get(self, section: str, key: str) -> Any:
        block = self._data.get(section)
        if not isinstance(block, dict):
            return None
        return block.get(key)

    @property
    def output_format(self) -> str:
        return str(self._get("general", "output_format") or "text")

    @property
    def git_timeout_seconds(self) -> float:
        return float(self._get("git", "timeout_seconds"))

    @property
    def retry_max_attempts(self) -> int:
        return int(self._get("retry", "max_attempts"))

    @property
    def retry_base_delay_seconds(self) -> float:
        return float(self._get("retry", "base_delay_seconds"))

    @property
    def retry_max_delay_seconds(self) -> float:
        return float(self._get("retry", "max_delay_seconds"))

    @property
    def log_level(self) -> str:
        return str(self._get("logging", "level") or "warning").upper()

    @property
    def log_file(self) -> Optional[Path]:
        value = self._get("logging", "file")
        return Path(value).expanduser() if value else None

    def issues(self) -> List[ValidationIssue]:
        return validate_settings(self._data)

    def validate(self) -> None:
        """Raise ``ConfigValidationError`` listing every problem found."""
        found = self.issues()
        if found:
            raise ConfigValidationError(found)


__all__ = ["UserSettings"]
