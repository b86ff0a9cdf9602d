"""External per-project key/value store.

The resolver only needs two lookups, so the store is a small protocol. The
production implementation reads the project's git config; tests substitute
an in-memory mapping.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

from grove.core.exceptions import ExternalStoreError
from grove.core.resilience import retry_with_backoff
from grove.core.utils.subprocess import DEFAULT_GIT_TIMEOUT_SECONDS, run_git_command

if TYPE_CHECKING:
    from grove.core.config.settings import UserSettings

logger = logging.getLogger(__name__)

# `git config --get` exits 1 when the key is not set.
_GIT_KEY_MISSING = 1


@runtime_checkable
class ExternalStore(Protocol):
    def get_one(self, key: str) -> Optional[str]:
        """Return the value for ``key`` or None when it is not set."""
        ...

    def get_all(self, key: str) -> List[str]:
        """Return every value of a repeated ``key`` (empty when not set)."""
        ...


class _TransientGitError(Exception):
    """Timeout talking to git; worth another attempt."""


class GitConfigStore:
    """Read ``grove.*`` keys from the git config visible in ``directory``."""

    def __init__(
        self,
        directory: Path | str,
        *,
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
        max_attempts: int = 1,
        base_delay: float = 0.2,
        max_delay: float = 2.0,
    ) -> None:
        self.directory = Path(directory)
        self.timeout = timeout
        self._call = retry_with_backoff(
            max_attempts=max_attempts,
            initial_delay=base_delay,
            max_delay=max_delay,
            exceptions=(_TransientGitError,),
        )(self._git_config)

    @classmethod
    def from_settings(cls, directory: Path | str, settings: "UserSettings") -> "GitConfigStore":
        return cls(
            directory,
            timeout=settings.git_timeout_seconds,
            max_attempts=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay_seconds,
            max_delay=settings.retry_max_delay_seconds,
        )

    def _git_config(self, args: List[str]) -> subprocess.CompletedProcess:
        try:
            return run_git_command(
                ["git", "config", *args],
                cwd=self.directory,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise _TransientGitError(f"git config timed out after {exc.timeout}s") from exc

    def _query(self, key: str, args: List[str]) -> Optional[str]:
        try:
            result = self._call(args)
        except _TransientGitError as exc:
            raise ExternalStoreError(key, str(exc)) from exc
        except OSError as exc:
            raise ExternalStoreError(key, str(exc)) from exc

        if result.returncode == _GIT_KEY_MISSING:
            return None
        if result.returncode != 0:
            reason = (result.stderr or "").strip() or f"git exited with status {result.returncode}"
            raise ExternalStoreError(key, reason)
        return result.stdout

    def get_one(self, key: str) -> Optional[str]:
        out = self._query(key, ["--get", key])
        if out is None:
            return None
        return out.strip()

    def get_all(self, key: str) -> List[str]:
        out = self._query(key, ["--get-all", key])
        if out is None:
            return []
        return [line for line in out.splitlines() if line.strip()]


__all__ = ["ExternalStore", "GitConfigStore"]
