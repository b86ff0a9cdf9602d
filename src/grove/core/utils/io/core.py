"""Core I/O utilities for Grove.

Single source of truth for safe file access patterns:
- Atomic writes (temp file + fsync + rename)
- Directory management utilities

This module provides the foundational I/O primitives used by yaml.py.
"""
from __future__ import annotations

import os
import time
from contextlib import suppress
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path (guaranteed to exist if create=True)

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def temp_path_for(path: Path) -> Path:
    """Return a sibling temp path unique to this process and instant.

    The name embeds the process id and a nanosecond timestamp so concurrent
    invocations writing the same target never pick the same temp file.
    """
    path = Path(path)
    return path.with_name(f"{path.name}.tmp.{os.getpid()}.{time.time_ns()}")


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    This helper is the single implementation for crash-safe writes:
    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, closed, then atomically renamed over ``path``
    - Any leftover temp file is removed on failure and the error re-raised

    The rename is the only step that touches ``path``, so readers observe
    either the previous content or the complete new content.

    Args:
        path: Target file path
        write_fn: Callable that writes content to the file object
        encoding: Text encoding (default: utf-8)
    """
    path = Path(path)
    ensure_parent_dir(path)

    candidate = temp_path_for(path)
    tmp_path: Optional[Path] = None
    try:
        with open(candidate, "x", encoding=encoding) as f:
            tmp_path = candidate
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
        tmp_path = None
    finally:
        if tmp_path is not None:
            with suppress(FileNotFoundError):
                tmp_path.unlink()


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(Path(path), _writer)


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "temp_path_for",
    "atomic_write",
    "write_text",
]
