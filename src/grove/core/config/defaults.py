"""Compiled-in defaults, read from ``grove/data/config/defaults.yaml``."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List

from grove.data import read_yaml


@dataclass(frozen=True)
class Defaults:
    """Lowest-precedence value of every project setting."""

    plain: bool = False
    debug: bool = False
    nerd_fonts: bool = True
    stale_threshold: str = "30d"
    preserve_patterns: List[str] = field(default_factory=list)
    preserve_exclude_patterns: List[str] = field(default_factory=list)
    autolock_patterns: List[str] = field(default_factory=list)

    def value(self, name: str) -> Any:
        """Return a private copy of the default for ``name``."""
        return copy.deepcopy(getattr(self, name))


def load_defaults() -> Defaults:
    project = read_yaml("config", "defaults.yaml").get("project") or {}
    return Defaults(
        plain=bool(project.get("plain", False)),
        debug=bool(project.get("debug", False)),
        nerd_fonts=bool(project.get("nerd_fonts", True)),
        stale_threshold=str(project.get("stale_threshold", "30d")),
        preserve_patterns=[str(p) for p in project.get("preserve_patterns") or []],
        preserve_exclude_patterns=[str(p) for p in project.get("preserve_exclude_patterns") or []],
        autolock_patterns=[str(p) for p in project.get("autolock_patterns") or []],
    )


def settings_defaults() -> Dict[str, Any]:
    """Return a fresh copy of the bundled tool-settings defaults."""
    return copy.deepcopy(read_yaml("config", "defaults.yaml").get("settings") or {})


__all__ = ["Defaults", "load_defaults", "settings_defaults"]
