from __future__ import annotations

from pathlib import Path


def write_grove_yaml(directory: Path, body: str) -> Path:
    path = directory / ".grove.yaml"
    path.write_text(body, encoding="utf-8")
    return path
