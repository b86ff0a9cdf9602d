"""Unified CLI output formatting (JSON and text modes)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Print ``message`` in text mode, or ``{"status": ..., **data}`` as JSON."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Report an error on stderr.

        Args:
            error: The exception that occurred
            message: Optional human-readable message (defaults to str(error))
            error_code: Error code for JSON output
            data: Extra fields merged into the JSON payload
        """
        msg = message or str(error)
        if self.json_mode:
            output = {"error": error_code, "message": msg, **(data or {})}
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        if not self.json_mode:
            print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
