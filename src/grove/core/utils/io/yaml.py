"""YAML I/O utilities with atomic writes."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .core import atomic_write


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    """Represent multiline strings with literal block style."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


yaml.add_representer(str, _str_representer, Dumper=yaml.SafeDumper)


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Args:
        path: YAML file path to read
        default: Value to return if file missing or invalid (default: None)
        raise_on_error: If True, propagate exceptions instead of returning default.

    Returns:
        Any: Parsed YAML data, or default if error
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def write_yaml(path: Path, data: Any, *, sort_keys: bool = False) -> None:
    """Atomically write YAML data to ``path``.

    Serialization happens inside the atomic writer, so an encode failure
    leaves the previous file untouched and no temp file behind.
    """

    def _writer(f) -> None:
        yaml.safe_dump(
            data,
            f,
            default_flow_style=False,
            sort_keys=sort_keys,
            allow_unicode=True,
        )

    atomic_write(Path(path), _writer)


__all__ = [
    "read_yaml",
    "write_yaml",
]
