"""Unified I/O utilities for Grove.

Re-exports the atomic text primitives and YAML helpers so callers can use a
single import path::

    from grove.core.utils.io import atomic_write, read_yaml, write_yaml
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    temp_path_for,
    write_text,
)
from .yaml import read_yaml, write_yaml

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "ensure_parent_dir",
    "temp_path_for",
    "write_text",
    "read_yaml",
    "write_yaml",
]
