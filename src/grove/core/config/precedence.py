"""Per-setting precedence between ``.grove.yaml``, git config and defaults.

The order is not uniform. Shareable project policy (what to preserve, what to
autolock) is meant to be committed, so the file wins. Personal workstation
preferences (plain output, debug, icons, stale threshold) let the operator's
git config override a checked-in file.

Every setting is described once in ``SETTINGS``; ``PrecedenceResolver.resolve``
walks the listed sources in order and returns the first explicit value.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from grove.core.config.defaults import Defaults, load_defaults
from grove.core.config.external import ExternalStore
from grove.core.config.file import FILE_NAME, FileConfig, FileConfigStore
from grove.core.exceptions import ConfigParseError, ExternalStoreError
from grove.core.utils.text import is_truthy

logger = logging.getLogger(__name__)


class Source(str, Enum):
    FILE = "file"
    EXTERNAL = "external"
    DEFAULT = "default"


class Kind(str, Enum):
    BOOL = "bool"
    STRING = "string"
    LIST = "list"


SHARED_ORDER: Tuple[Source, ...] = (Source.FILE, Source.EXTERNAL, Source.DEFAULT)
PERSONAL_ORDER: Tuple[Source, ...] = (Source.EXTERNAL, Source.FILE, Source.DEFAULT)


@dataclass(frozen=True)
class SettingSpec:
    name: str
    external_key: str
    kind: Kind
    order: Tuple[Source, ...]


SETTINGS: Dict[str, SettingSpec] = {
    spec.name: spec
    for spec in (
        SettingSpec("preserve_patterns", "grove.preserve", Kind.LIST, SHARED_ORDER),
        SettingSpec("preserve_exclude_patterns", "grove.preserveExclude", Kind.LIST, SHARED_ORDER),
        SettingSpec("autolock_patterns", "grove.autoLock", Kind.LIST, SHARED_ORDER),
        SettingSpec("plain", "grove.plain", Kind.BOOL, PERSONAL_ORDER),
        SettingSpec("debug", "grove.debug", Kind.BOOL, PERSONAL_ORDER),
        SettingSpec("nerd_fonts", "grove.nerdFonts", Kind.BOOL, PERSONAL_ORDER),
        SettingSpec("stale_threshold", "grove.staleThreshold", Kind.STRING, PERSONAL_ORDER),
    )
}

MISSING = object()


def file_value(spec: SettingSpec, cfg: FileConfig) -> Any:
    """Return the file's explicit value for ``spec`` or ``MISSING``.

    Booleans are present whenever they are not None, so a written ``false``
    counts as set. Strings and lists must be non-empty.
    """
    value = getattr(cfg, spec.name)
    if spec.kind is Kind.BOOL:
        return MISSING if value is None else value
    if not value:
        return MISSING
    return list(value) if spec.kind is Kind.LIST else value


def external_value(spec: SettingSpec, store: ExternalStore) -> Any:
    """Return the store's explicit value for ``spec`` or ``MISSING``.

    Raises:
        ExternalStoreError: Propagated from the store.
    """
    if spec.kind is Kind.LIST:
        values = store.get_all(spec.external_key)
        return list(values) if values else MISSING

    raw = store.get_one(spec.external_key)
    if raw is None or not raw.strip():
        return MISSING
    if spec.kind is Kind.BOOL:
        return is_truthy(raw)
    return raw.strip()


class PrecedenceResolver:
    """Compute effective settings for one project directory."""

    def __init__(
        self,
        directory: Path | str,
        store: Optional[ExternalStore] = None,
        *,
        defaults: Optional[Defaults] = None,
        file_store: Optional[FileConfigStore] = None,
    ) -> None:
        self.directory = Path(directory)
        self.store = store
        self.defaults = defaults or load_defaults()
        self.file_store = file_store or FileConfigStore()
        self.file_error: Optional[ConfigParseError] = None
        self._file_config: Optional[FileConfig] = None

    @property
    def file_config(self) -> FileConfig:
        """The parsed file, or a zero value when missing or unparsable."""
        if self._file_config is None:
            try:
                self._file_config = self.file_store.load(self.directory)
            except ConfigParseError as exc:
                logger.warning("failed to parse %s: %s (using fallback)", FILE_NAME, exc.reason)
                self.file_error = exc
                self._file_config = FileConfig()
        return self._file_config

    def _lookup(self, spec: SettingSpec, source: Source) -> Any:
        if source is Source.FILE:
            return file_value(spec, self.file_config)
        if source is Source.EXTERNAL:
            if self.store is None:
                return MISSING
            try:
                return external_value(spec, self.store)
            except ExternalStoreError as exc:
                logger.warning("%s (using fallback)", exc)
                return MISSING
        return self.defaults.value(spec.name)

    def resolve_with_source(self, name: str) -> Tuple[Any, Source]:
        spec = SETTINGS[name]
        for source in spec.order:
            value = self._lookup(spec, source)
            if value is not MISSING:
                return value, source
        # Every order ends with DEFAULT, which always yields a value.
        raise AssertionError(f"no source produced a value for {name}")

    def resolve(self, name: str) -> Any:
        return self.resolve_with_source(name)[0]

    def resolve_all(self) -> "EffectiveConfig":
        from grove.core.config.state import EffectiveConfig

        return EffectiveConfig(**{name: self.resolve(name) for name in SETTINGS})

    def explain(self) -> Dict[str, Source]:
        """Map each setting to the source that supplied its effective value."""
        return {name: self.resolve_with_source(name)[1] for name in SETTINGS}


__all__ = [
    "Source",
    "Kind",
    "SettingSpec",
    "SETTINGS",
    "SHARED_ORDER",
    "PERSONAL_ORDER",
    "MISSING",
    "file_value",
    "external_value",
    "PrecedenceResolver",
]
