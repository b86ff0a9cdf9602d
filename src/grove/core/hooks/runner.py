"""Sequential, fail-fast execution of user-configured hook commands.

Hook failures are reported as data on ``RunResult``; nothing here raises for
a failing command.
"""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from grove.core.utils.subprocess import exit_code_of, run_command, shell_argv

logger = logging.getLogger(__name__)


@dataclass
class HookResult:
    command: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""


@dataclass
class RunResult:
    succeeded: List[str] = field(default_factory=list)
    failed: Optional[HookResult] = None

    @property
    def ok(self) -> bool:
        return self.failed is None

    def to_dict(self) -> dict:
        failed = None
        if self.failed is not None:
            failed = {
                "command": self.failed.command,
                "exit_code": self.failed.exit_code,
                "stdout": self.failed.stdout,
                "stderr": self.failed.stderr,
            }
        return {"succeeded": list(self.succeeded), "failed": failed}


def run_hooks(work_dir: Path | str, commands: Sequence[str]) -> RunResult:
    """Run ``commands`` in order inside ``work_dir``, stopping at the first failure.

    Each command runs through ``sh -c`` with stdin closed and both output
    streams captured; undecodable bytes are replaced.
    A command that cannot be started counts as a failure with exit code 1.
    """
    result = RunResult()
    if not commands:
        return result

    logger.debug("Running %d hooks in %s", len(commands), work_dir)
    for command in commands:
        logger.debug("Executing hook: %s", command)
        try:
            proc = run_command(
                shell_argv(command),
                cwd=work_dir,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                errors="replace",
            )
        except OSError as exc:
            result.failed = HookResult(command, 1, "", f"failed to start hook: {exc}")
            logger.debug("Hook could not start: %s (%s)", command, exc)
            return result

        if proc.returncode != 0:
            code = exit_code_of(proc.returncode)
            result.failed = HookResult(command, code, proc.stdout or "", proc.stderr or "")
            logger.debug("Hook failed with exit code %d: %s", code, command)
            return result

        result.succeeded.append(command)
        logger.debug("Hook succeeded: %s", command)
    return result


__all__ = ["HookResult", "RunResult", "run_hooks"]
