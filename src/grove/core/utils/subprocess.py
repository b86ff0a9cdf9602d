"""Subprocess helpers.

Thin wrappers around :mod:`subprocess` with safe defaults:
- No ``shell=True``; shell strings run explicitly as ``sh -c <command>``
- Optional timeout (hooks run without one)
- Debug logging of every spawned command
"""
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, List, MutableMapping, Optional, Sequence

logger = logging.getLogger(__name__)

SHELL = "sh"
DEFAULT_GIT_TIMEOUT_SECONDS = 30.0


def _flatten_cmd(cmd: Any) -> List[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def _to_cwd(cwd: Optional[Path | str]) -> Optional[str]:
    """Convert Path or str cwd to str for subprocess."""
    if cwd is None:
        return None
    return str(cwd)


def shell_argv(command: str) -> List[str]:
    """Return the argv that runs ``command`` through the POSIX shell."""
    return [SHELL, "-c", command]


def run_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[MutableMapping[str, str]] = None,
    timeout: Optional[float] = None,
    capture_output: bool = False,
    text: bool = True,
    check: bool = False,
    input: Any = None,
    stdin: Any = None,
    errors: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Thin wrapper around subprocess.run with safe defaults.

    Args:
        cmd: Command sequence to execute
        cwd: Working directory (Path or str)
        env: Environment variables
        timeout: Timeout in seconds (None waits indefinitely)
        capture_output: Capture stdout/stderr
        text: Return output as text instead of bytes
        check: Raise CalledProcessError on non-zero exit
        input: Data sent to the child's stdin
        stdin: Explicit stdin (e.g. subprocess.DEVNULL); not combined with ``input``
        errors: Decoding error handler for text output (e.g. "replace")

    Returns:
        CompletedProcess from subprocess.run
    """
    argv = _flatten_cmd(cmd)
    logger.debug("Running %s (cwd=%s)", argv, cwd)
    return subprocess.run(
        argv,
        cwd=_to_cwd(cwd),
        env=env,
        timeout=timeout,
        capture_output=capture_output,
        text=text,
        check=check,
        input=input,
        stdin=stdin,
        errors=errors,
    )


def run_git_command(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    timeout: Optional[float] = None,
    capture_output: bool = True,
    check: bool = False,
) -> subprocess.CompletedProcess:
    """Run a git command with a bounded timeout.

    Args:
        cmd: Git command sequence (``["git", ...]``)
        cwd: Working directory (Path or str)
        timeout: Timeout in seconds (defaults to DEFAULT_GIT_TIMEOUT_SECONDS)
        capture_output: Capture stdout/stderr
        check: Raise CalledProcessError on non-zero exit
    """
    return run_command(
        cmd,
        cwd=cwd,
        timeout=timeout if timeout is not None else DEFAULT_GIT_TIMEOUT_SECONDS,
        capture_output=capture_output,
        text=True,
        check=check,
    )


def spawn(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    env: Optional[MutableMapping[str, str]] = None,
) -> subprocess.Popen:
    """Start ``cmd`` with both output streams piped as raw bytes."""
    argv = _flatten_cmd(cmd)
    logger.debug("Spawning %s (cwd=%s)", argv, cwd)
    return subprocess.Popen(
        argv,
        cwd=_to_cwd(cwd),
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )


def exit_code_of(returncode: Optional[int]) -> int:
    """Normalise a Popen return code into a shell-style exit status.

    Signal-terminated processes (negative return codes) map to ``128 + signal``;
    a missing or zero-but-failed code falls back to ``1``.
    """
    if returncode is None:
        return 1
    if returncode < 0:
        return 128 + (-returncode)
    return returncode or 1


__all__ = [
    "SHELL",
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "shell_argv",
    "run_command",
    "run_git_command",
    "spawn",
    "exit_code_of",
]
