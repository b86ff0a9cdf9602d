"""Search locations for the tool-level settings file.

Order (highest precedence first):
1. ``GROVE_CONFIG`` (its parent directory; the named file itself is tried first)
2. Current working directory
3. Platform user config directory
4. Home directory
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

ENV_CONFIG = "GROVE_CONFIG"
APP_DIR_NAME = "grove"
SETTINGS_FILE_NAMES: Tuple[str, ...] = ("config.yaml", "config.yml")


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def get_home_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    env = _env(environ)
    return env.get("HOME") or env.get("USERPROFILE") or ""


def get_user_config_dir(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> str:
    """Return the platform user config directory for grove, or ``""``."""
    env = _env(environ)
    platform = platform or sys.platform

    if platform.startswith("win"):
        if env.get("APPDATA"):
            return str(Path(env["APPDATA"]) / APP_DIR_NAME)
        if env.get("USERPROFILE"):
            return str(Path(env["USERPROFILE"]) / "AppData" / "Roaming" / APP_DIR_NAME)
        return ""

    home = get_home_dir(env)
    if platform == "darwin":
        return str(Path(home) / "Library" / "Application Support" / APP_DIR_NAME) if home else ""

    if env.get("XDG_CONFIG_HOME"):
        return str(Path(env["XDG_CONFIG_HOME"]) / APP_DIR_NAME)
    return str(Path(home) / ".config" / APP_DIR_NAME) if home else ""


def get_config_paths(
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
    platform: Optional[str] = None,
) -> List[Path]:
    """Return directories searched for settings, highest precedence first."""
    env = _env(environ)
    paths: List[Path] = []

    override = env.get(ENV_CONFIG)
    if override:
        paths.append(Path(override).expanduser().parent)

    try:
        paths.append(Path(cwd) if cwd is not None else Path.cwd())
    except OSError:
        pass

    user_dir = get_user_config_dir(env, platform)
    if user_dir:
        paths.append(Path(user_dir))

    home = get_home_dir(env)
    if home:
        paths.append(Path(home))

    return paths


def find_settings_file(
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
    platform: Optional[str] = None,
) -> Optional[Path]:
    """Return the first existing settings file on the search path."""
    env = _env(environ)
    override = env.get(ENV_CONFIG)
    if override:
        explicit = Path(override).expanduser()
        if explicit.is_file():
            return explicit

    for directory in get_config_paths(env, cwd, platform):
        for name in SETTINGS_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


@dataclass(frozen=True)
class ConfigPathInfo:
    path: Path
    priority: int
    exists: bool
    file: Optional[Path]


def list_config_paths(
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
    platform: Optional[str] = None,
) -> List[ConfigPathInfo]:
    """Describe every search location with its priority (1 = highest)."""
    result: List[ConfigPathInfo] = []
    for priority, directory in enumerate(get_config_paths(environ, cwd, platform), start=1):
        found = next(
            (directory / name for name in SETTINGS_FILE_NAMES if (directory / name).is_file()),
            None,
        )
        result.append(ConfigPathInfo(directory, priority, found is not None, found))
    return result


__all__ = [
    "ENV_CONFIG",
    "SETTINGS_FILE_NAMES",
    "get_home_dir",
    "get_user_config_dir",
    "get_config_paths",
    "find_settings_file",
    "ConfigPathInfo",
    "list_config_paths",
]
