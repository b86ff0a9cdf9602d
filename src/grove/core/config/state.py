"""Process-lifetime effective settings, passed explicitly.

A ``ConfigState`` is created once at startup, populated by the precedence
resolver, adjusted by environment overrides and CLI flags, and then handed to
whatever needs it. Temporary changes are scoped with ``save_snapshot`` /
``restore_snapshot`` (or the ``override`` context manager) rather than locks.
"""
from __future__ import annotations

import copy
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Mapping, Optional

from grove.core.config.defaults import Defaults, load_defaults
from grove.core.config.external import ExternalStore
from grove.core.config.precedence import MISSING, SETTINGS, PrecedenceResolver, external_value
from grove.core.exceptions import ExternalStoreError
from grove.core.utils.text import is_env_truthy

logger = logging.getLogger(__name__)

ENV_PLAIN = "GROVE_PLAIN"
ENV_DEBUG = "GROVE_DEBUG"


@dataclass
class EffectiveConfig:
    plain: bool = False
    debug: bool = False
    nerd_fonts: bool = True
    stale_threshold: str = "30d"
    preserve_patterns: List[str] = field(default_factory=list)
    preserve_exclude_patterns: List[str] = field(default_factory=list)
    autolock_patterns: List[str] = field(default_factory=list)

    @classmethod
    def from_defaults(cls, defaults: Defaults) -> "EffectiveConfig":
        return cls(**{f.name: defaults.value(f.name) for f in fields(cls)})

    def to_dict(self) -> dict:
        return {f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(self)}


# A snapshot is an independent deep copy of the live config.
Snapshot = EffectiveConfig


class ConfigState:
    """Holder of the live ``EffectiveConfig`` for one process run."""

    def __init__(self, defaults: Optional[Defaults] = None) -> None:
        self.defaults = defaults or load_defaults()
        self.config = EffectiveConfig.from_defaults(self.defaults)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------
    def load(self, directory: Path | str, store: Optional[ExternalStore] = None) -> PrecedenceResolver:
        """Resolve every setting for ``directory`` into the live config.

        Returns the resolver so callers can inspect ``file_error`` or sources.
        """
        resolver = PrecedenceResolver(directory, store, defaults=self.defaults)
        self.config = resolver.resolve_all()
        return resolver

    def resolve_for(self, directory: Path | str, store: Optional[ExternalStore] = None) -> EffectiveConfig:
        """Compute the effective config of another project without touching the live one."""
        return PrecedenceResolver(directory, store, defaults=self.defaults).resolve_all()

    def load_from_external_store(self, store: ExternalStore) -> None:
        """Re-read every store-backed setting.

        Settings the store no longer defines go back to their compiled default,
        so an override removed from the store does not linger.
        """
        for name, spec in SETTINGS.items():
            try:
                value = external_value(spec, store)
            except ExternalStoreError as exc:
                logger.warning("%s (using default)", exc)
                value = MISSING
            if value is MISSING:
                value = self.defaults.value(name)
            setattr(self.config, name, value)

    def load_from_environment(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Apply ``GROVE_PLAIN`` / ``GROVE_DEBUG``.

        Only ``"1"`` or ``"true"`` (any case) switch a flag on; other values
        leave the current setting alone.
        """
        env = os.environ if environ is None else environ
        if is_env_truthy(env.get(ENV_PLAIN)):
            self.config.plain = True
        if is_env_truthy(env.get(ENV_DEBUG)):
            self.config.debug = True

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def save_snapshot(self) -> Snapshot:
        return copy.deepcopy(self.config)

    def restore_snapshot(self, snapshot: Snapshot) -> None:
        self.config = copy.deepcopy(snapshot)

    @contextmanager
    def override(self, **changes) -> Iterator[EffectiveConfig]:
        """Temporarily replace settings; the previous values come back on exit."""
        unknown = set(changes) - set(SETTINGS)
        if unknown:
            raise KeyError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        snapshot = self.save_snapshot()
        try:
            for name, value in changes.items():
                setattr(self.config, name, copy.deepcopy(value))
            yield self.config
        finally:
            self.restore_snapshot(snapshot)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def is_plain(self) -> bool:
        return self.config.plain

    def is_debug(self) -> bool:
        return self.config.debug

    def is_nerd_fonts(self) -> bool:
        return self.config.nerd_fonts

    def stale_threshold(self) -> str:
        return self.config.stale_threshold

    def preserve_patterns(self) -> List[str]:
        return list(self.config.preserve_patterns)

    def preserve_exclude_patterns(self) -> List[str]:
        return list(self.config.preserve_exclude_patterns)

    def autolock_patterns(self) -> List[str]:
        return list(self.config.autolock_patterns)

    def should_autolock(self, branch: str) -> bool:
        """True when ``branch`` matches one of the autolock glob patterns."""
        return any(fnmatchcase(branch, pattern) for pattern in self.config.autolock_patterns)


__all__ = [
    "ENV_PLAIN",
    "ENV_DEBUG",
    "EffectiveConfig",
    "Snapshot",
    "ConfigState",
]
