"""Per-project declarative config file (``.grove.yaml``).

Absence of the file is not an error and yields a zero-value ``FileConfig``.
A file that exists but cannot be parsed raises ``ConfigParseError``; no
partially populated config is ever returned.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from grove.core.exceptions import ConfigParseError
from grove.core.utils.io import write_text, write_yaml
from grove.data import read_text as read_data_text

logger = logging.getLogger(__name__)

FILE_NAME = ".grove.yaml"

_TOP_LEVEL_KEYS = frozenset(
    {"plain", "debug", "nerd_fonts", "stale_threshold", "preserve", "hooks", "autolock"}
)


@dataclass
class FileConfig:
    """Parsed ``.grove.yaml``. ``None`` booleans mean "not set in the file"."""

    preserve_patterns: List[str] = field(default_factory=list)
    preserve_exclude_patterns: List[str] = field(default_factory=list)
    hooks_add: List[str] = field(default_factory=list)
    hooks_create: List[str] = field(default_factory=list)
    autolock_patterns: List[str] = field(default_factory=list)
    plain: Optional[bool] = None
    debug: Optional[bool] = None
    nerd_fonts: Optional[bool] = None
    stale_threshold: str = ""

    def is_empty(self) -> bool:
        return self == FileConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk layout, omitting unset fields."""
        data: Dict[str, Any] = {}
        for name in ("plain", "debug", "nerd_fonts"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.stale_threshold:
            data["stale_threshold"] = self.stale_threshold

        preserve: Dict[str, Any] = {}
        if self.preserve_patterns:
            preserve["patterns"] = list(self.preserve_patterns)
        if self.preserve_exclude_patterns:
            preserve["exclude"] = list(self.preserve_exclude_patterns)
        if preserve:
            data["preserve"] = preserve

        hooks: Dict[str, Any] = {}
        if self.hooks_add:
            hooks["add"] = list(self.hooks_add)
        if self.hooks_create:
            hooks["create"] = list(self.hooks_create)
        if hooks:
            data["hooks"] = hooks

        if self.autolock_patterns:
            data["autolock"] = {"patterns": list(self.autolock_patterns)}
        return data


def config_path(directory: Path | str) -> Path:
    return Path(directory) / FILE_NAME


def _section(data: Mapping[str, Any], name: str, path: Path) -> Mapping[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigParseError(path, f"expected a mapping, got {type(value).__name__}", field=name)
    return value


def _string_list(section: Mapping[str, Any], key: str, field_name: str, path: Path) -> List[str]:
    value = section.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigParseError(path, f"expected a list, got {type(value).__name__}", field=field_name)
    out: List[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigParseError(
                path,
                f"expected a string, got {type(item).__name__}",
                field=f"{field_name}[{index}]",
            )
        out.append(item)
    return out


def _optional_bool(data: Mapping[str, Any], key: str, path: Path) -> Optional[bool]:
    if key not in data or data[key] is None:
        return None
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigParseError(path, f"expected true or false, got {value!r}", field=key)
    return value


def parse_file_config(data: Any, path: Path) -> FileConfig:
    """Convert a parsed YAML document into a ``FileConfig``.

    Raises:
        ConfigParseError: When the document does not have the expected shape.
    """
    if data is None:
        return FileConfig()
    if not isinstance(data, Mapping):
        raise ConfigParseError(path, f"top level must be a mapping, got {type(data).__name__}")

    unknown = sorted(str(k) for k in data.keys() if k not in _TOP_LEVEL_KEYS)
    if unknown:
        logger.debug("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))

    stale = data.get("stale_threshold")
    if stale is None:
        stale = ""
    elif not isinstance(stale, str):
        raise ConfigParseError(
            path, f"expected a string like '30d', got {stale!r}", field="stale_threshold"
        )

    preserve = _section(data, "preserve", path)
    hooks = _section(data, "hooks", path)
    autolock = _section(data, "autolock", path)

    return FileConfig(
        preserve_patterns=_string_list(preserve, "patterns", "preserve.patterns", path),
        preserve_exclude_patterns=_string_list(preserve, "exclude", "preserve.exclude", path),
        hooks_add=_string_list(hooks, "add", "hooks.add", path),
        hooks_create=_string_list(hooks, "create", "hooks.create", path),
        autolock_patterns=_string_list(autolock, "patterns", "autolock.patterns", path),
        plain=_optional_bool(data, "plain", path),
        debug=_optional_bool(data, "debug", path),
        nerd_fonts=_optional_bool(data, "nerd_fonts", path),
        stale_threshold=stale,
    )


class FileConfigStore:
    """Load, check and persist ``.grove.yaml`` in a project directory."""

    file_name = FILE_NAME

    def load(self, directory: Path | str) -> FileConfig:
        """Return the parsed config, or a zero value when the file is missing.

        Raises:
            ConfigParseError: If the file exists but is malformed.
        """
        path = config_path(directory)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return FileConfig()
        except OSError as exc:
            raise ConfigParseError(path, str(exc)) from exc

        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigParseError(path, str(exc)) from exc

        return parse_file_config(data, path)

    def exists(self, directory: Path | str) -> bool:
        return config_path(directory).is_file()

    def write(self, directory: Path | str, config: FileConfig) -> None:
        """Persist ``config`` atomically (temp file in the same directory + rename)."""
        path = config_path(directory)
        write_yaml(path, config.to_dict())
        logger.debug("Wrote %s", path)

    def write_template(self, directory: Path | str) -> None:
        """Write the annotated starter template (comments only, so it loads as empty)."""
        path = config_path(directory)
        write_text(path, read_data_text("templates", "grove.yaml"))
        logger.debug("Wrote template %s", path)

    def get_add_hooks(self, directory: Path | str) -> List[str]:
        return self._hooks(directory, "add")

    def get_create_hooks(self, directory: Path | str) -> List[str]:
        return self._hooks(directory, "create")

    def _hooks(self, directory: Path | str, kind: str) -> List[str]:
        try:
            cfg = self.load(directory)
        except ConfigParseError as exc:
            logger.debug("Failed to load config for hooks: %s", exc)
            return []
        return list(cfg.hooks_add if kind == "add" else cfg.hooks_create)


__all__ = [
    "FILE_NAME",
    "FileConfig",
    "FileConfigStore",
    "config_path",
    "parse_file_config",
]
