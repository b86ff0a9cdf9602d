from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from grove.core.config.validation import ValidationIssue


class GroveError(Exception):
    """Base exception for Grove."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigParseError(GroveError, ValueError):
    """Raised when the project config file exists but cannot be parsed.

    A config that failed to parse must be discarded as a whole; callers never
    receive a partially populated value alongside this error.
    """

    def __init__(
        self,
        path: Path | str,
        reason: str,
        *,
        field: Optional[str] = None,
    ) -> None:
        self.path = Path(path)
        self.reason = reason
        self.field = field
        where = f" (field '{field}')" if field else ""
        message = f"failed to parse {self.path}{where}: {reason}"
        ctx: Dict[str, Any] = {"path": str(self.path), "reason": reason}
        if field:
            ctx["field"] = field
        GroveError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ExternalStoreError(GroveError, RuntimeError):
    """Raised when the external key/value store cannot be queried."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        message = f"failed to read '{key}' from external store: {reason}"
        GroveError.__init__(self, message, context={"key": key, "reason": reason})
        RuntimeError.__init__(self, message)


class ConfigValidationError(GroveError, ValueError):
    """Aggregate of every validation issue found in one pass."""

    def __init__(self, issues: Iterable["ValidationIssue"]) -> None:
        self.issues: List["ValidationIssue"] = list(issues)
        if self.issues:
            lines = "\n".join(str(issue) for issue in self.issues)
            message = f"configuration validation failed:\n{lines}"
        else:
            message = "no validation errors"
        GroveError.__init__(
            self,
            message,
            context={"issues": [issue.to_dict() for issue in self.issues]},
        )
        ValueError.__init__(self, message)


__all__ = [
    "GroveError",
    "ConfigParseError",
    "ExternalStoreError",
    "ConfigValidationError",
]
