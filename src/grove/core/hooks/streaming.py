"""Hook execution with live, line-prefixed output.

While a hook runs, each of its output streams is drained by a reader thread
into a ``LineFramer``. Framers buffer partial data and only emit whole lines,
so concurrent stdout and stderr never interleave inside a line. The two
framers of one command share a single lock; nothing is shared across commands.
"""
from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import IO, Optional, Sequence, TextIO, Union

from grove.core import styles
from grove.core.hooks.runner import HookResult, RunResult
from grove.core.utils.subprocess import exit_code_of, shell_argv, spawn

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


class LineFramer:
    """Writer that emits ``"<prefix> <line>"`` for every complete line."""

    def __init__(self, prefix: str, sink: TextIO, lock: threading.Lock) -> None:
        self.prefix = prefix
        self.sink = sink
        self.lock = lock
        self._buf = bytearray()

    def _emit(self, line: bytes) -> None:
        self.sink.write(f"{self.prefix} {line.decode('utf-8', errors='replace')}")

    def write(self, data: Union[bytes, str]) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        with self.lock:
            self._buf.extend(data)
            emitted = False
            while True:
                idx = self._buf.find(b"\n")
                if idx < 0:
                    break
                line = bytes(self._buf[: idx + 1])
                del self._buf[: idx + 1]
                self._emit(line)
                emitted = True
            if emitted and hasattr(self.sink, "flush"):
                self.sink.flush()
        return len(data)

    def flush(self) -> None:
        """Emit any trailing partial line, newline-terminated. Safe to repeat."""
        with self.lock:
            if not self._buf:
                return
            remaining = bytes(self._buf)
            self._buf.clear()
            self._emit(remaining + b"\n")
            if hasattr(self.sink, "flush"):
                self.sink.flush()


def _drain(stream: IO[bytes], framer: LineFramer) -> None:
    read = getattr(stream, "read1", stream.read)
    try:
        for chunk in iter(lambda: read(_CHUNK_SIZE), b""):
            framer.write(chunk)
    finally:
        stream.close()


def _run_one(work_dir: Path | str, command: str, output: TextIO, plain: bool) -> Optional[HookResult]:
    lock = threading.Lock()
    prefix = styles.dimmed(f"  [{command}]", plain=plain)
    out_framer = LineFramer(prefix, output, lock)
    err_framer = LineFramer(prefix, output, lock)

    try:
        proc = spawn(shell_argv(command), cwd=work_dir)
    except OSError as exc:
        logger.debug("Hook could not start: %s (%s)", command, exc)
        return HookResult(command, 1, "", f"failed to start hook: {exc}")

    readers = [
        threading.Thread(target=_drain, args=(proc.stdout, out_framer), daemon=True),
        threading.Thread(target=_drain, args=(proc.stderr, err_framer), daemon=True),
    ]
    for reader in readers:
        reader.start()

    returncode = proc.wait()
    for reader in readers:
        reader.join()

    out_framer.flush()
    err_framer.flush()

    if returncode != 0:
        code = exit_code_of(returncode)
        logger.debug("Hook failed with exit code %d: %s", code, command)
        # Output already reached the sink; nothing is kept for the result.
        return HookResult(command, code, "", "")
    return None


def run_hooks_streaming(
    work_dir: Path | str,
    commands: Sequence[str],
    output: Optional[TextIO] = None,
    *,
    plain: bool = False,
) -> RunResult:
    """Run ``commands`` like ``run_hooks`` but stream their output to ``output``.

    ``output`` defaults to ``sys.stdout``. There is no timeout: a hook that
    never exits blocks the run.
    """
    result = RunResult()
    if not commands:
        return result

    sink = output if output is not None else sys.stdout
    logger.debug("Running %d hooks in %s (streaming)", len(commands), work_dir)
    for command in commands:
        logger.debug("Executing hook: %s", command)
        failed = _run_one(work_dir, command, sink, plain)
        if failed is not None:
            result.failed = failed
            return result
        result.succeeded.append(command)
        logger.debug("Hook succeeded: %s", command)
    return result


__all__ = ["LineFramer", "run_hooks_streaming"]
