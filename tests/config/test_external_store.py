from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List

import pytest

import grove.core.config.external as external
from grove.core.config.external import GitConfigStore
from grove.core.exceptions import ExternalStoreError
from grove.core.resilience import backoff_delays, retry_with_backoff


def _completed(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["git"], returncode, stdout, stderr)


def test_timeouts_are_retried(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[list] = []

    def fake_git(cmd, *, cwd, timeout):
        calls.append(list(cmd))
        if len(calls) < 3:
            raise subprocess.TimeoutExpired(cmd, timeout)
        return _completed(0, "main\n")

    monkeypatch.setattr(external, "run_git_command", fake_git)
    store = GitConfigStore(tmp_path, timeout=1.0, max_attempts=3, base_delay=0.001, max_delay=0.001)

    assert store.get_one("grove.autoLock") == "main"
    assert len(calls) == 3
    assert calls[0] == ["git", "config", "--get", "grove.autoLock"]


def test_exhausted_retries_raise_store_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_git(cmd, *, cwd, timeout):
        raise subprocess.TimeoutExpired(cmd, timeout)

    monkeypatch.setattr(external, "run_git_command", fake_git)
    store = GitConfigStore(tmp_path, timeout=0.5, max_attempts=2, base_delay=0.001, max_delay=0.001)

    with pytest.raises(ExternalStoreError, match="timed out"):
        store.get_all("grove.preserve")


def test_unexpected_exit_status_is_store_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        external,
        "run_git_command",
        lambda cmd, *, cwd, timeout: _completed(128, stderr="fatal: bad config line 3\n"),
    )

    with pytest.raises(ExternalStoreError) as excinfo:
        GitConfigStore(tmp_path).get_one("grove.plain")

    assert excinfo.value.reason == "fatal: bad config line 3"


def test_exit_status_one_means_absent(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(external, "run_git_command", lambda cmd, *, cwd, timeout: _completed(1))
    store = GitConfigStore(tmp_path)

    assert store.get_one("grove.plain") is None
    assert store.get_all("grove.preserve") == []


def test_get_all_skips_blank_lines(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        external,
        "run_git_command",
        lambda cmd, *, cwd, timeout: _completed(0, ".env\n\n.envrc\n"),
    )

    assert GitConfigStore(tmp_path).get_all("grove.preserve") == [".env", ".envrc"]


def test_retry_with_backoff_only_catches_listed_exceptions() -> None:
    attempts = []

    @retry_with_backoff(max_attempts=3, initial_delay=0, exceptions=(KeyError,))
    def flaky() -> str:
        attempts.append(1)
        raise ValueError("not retried")

    with pytest.raises(ValueError):
        flaky()
    assert len(attempts) == 1


def test_backoff_delays_grow_and_cap() -> None:
    delays = backoff_delays(0.2, 2.0, 0.5)

    assert [next(delays) for _ in range(4)] == [0.2, 0.4, 0.5, 0.5]
