from __future__ import annotations

import io
import re
import threading
from pathlib import Path

from grove.core import styles
from grove.core.hooks import LineFramer, run_hooks_streaming


def _framer(prefix: str = "P"):
    sink = io.StringIO()
    return LineFramer(prefix, sink, threading.Lock()), sink


def test_complete_line_is_emitted_immediately() -> None:
    framer, sink = _framer()

    written = framer.write(b"a\nb")

    assert written == 3
    assert sink.getvalue() == "P a\n"

    framer.flush()
    assert sink.getvalue() == "P a\nP b\n"


def test_partial_writes_are_joined() -> None:
    framer, sink = _framer()

    framer.write("hel")
    assert sink.getvalue() == ""
    framer.write("lo\n")

    assert sink.getvalue() == "P hello\n"


def test_flush_is_idempotent_and_noop_when_empty() -> None:
    framer, sink = _framer()
    framer.flush()
    assert sink.getvalue() == ""

    framer.write("tail")
    framer.flush()
    framer.flush()

    assert sink.getvalue() == "P tail\n"


def test_empty_prefix_keeps_separator() -> None:
    framer, sink = _framer("")

    framer.write("a\n")

    assert sink.getvalue() == " a\n"


def test_multiple_lines_in_one_write() -> None:
    framer, sink = _framer()

    framer.write(b"1\n2\n3\n")

    assert sink.getvalue() == "P 1\nP 2\nP 3\n"


def test_undecodable_bytes_are_replaced() -> None:
    framer, sink = _framer()

    framer.write(b"\xff\n")

    assert sink.getvalue() == "P \ufffd\n"


def test_streams_output_with_command_prefix(tmp_path: Path) -> None:
    sink = io.StringIO()
    command = "echo hi; echo err >&2"

    result = run_hooks_streaming(tmp_path, [command], sink, plain=True)

    assert result.ok
    assert result.succeeded == [command]
    lines = sink.getvalue().splitlines()
    assert sorted(lines) == sorted([f"  [{command}] hi", f"  [{command}] err"])


def test_trailing_partial_line_is_not_lost(tmp_path: Path) -> None:
    sink = io.StringIO()

    run_hooks_streaming(tmp_path, ["printf partial"], sink, plain=True)

    assert sink.getvalue() == "  [printf partial] partial\n"


def test_prefix_is_dimmed_unless_plain(tmp_path: Path) -> None:
    sink = io.StringIO()

    run_hooks_streaming(tmp_path, ["echo x"], sink)

    assert sink.getvalue() == f"{styles.dimmed('  [echo x]')} x\n"
    assert styles.Colors.DIM in sink.getvalue()


def test_fail_fast_with_empty_buffers(tmp_path: Path) -> None:
    sink = io.StringIO()

    result = run_hooks_streaming(tmp_path, ["echo first", "echo boom; exit 42", "touch never"], sink, plain=True)

    assert result.succeeded == ["echo first"]
    assert result.failed.command == "echo boom; exit 42"
    assert result.failed.exit_code == 42
    assert result.failed.stdout == ""
    assert result.failed.stderr == ""
    assert "  [echo boom; exit 42] boom\n" in sink.getvalue()
    assert not (tmp_path / "never").exists()


def test_start_failure(tmp_path: Path) -> None:
    sink = io.StringIO()

    result = run_hooks_streaming(tmp_path / "missing", ["echo hi"], sink, plain=True)

    assert result.failed.exit_code == 1
    assert "failed to start hook" in result.failed.stderr
    assert sink.getvalue() == ""


def test_concurrent_streams_never_split_lines(tmp_path: Path) -> None:
    sink = io.StringIO()
    command = 'i=0; while [ $i -lt 300 ]; do echo "out $i"; echo "err $i" >&2; i=$((i+1)); done'

    result = run_hooks_streaming(tmp_path, [command], sink, plain=True)

    assert result.ok
    prefix = f"  [{command}] "
    pattern = re.compile(r"(out|err) \d+")
    lines = sink.getvalue().splitlines()
    assert len(lines) == 600
    for line in lines:
        assert line.startswith(prefix)
        assert pattern.fullmatch(line[len(prefix):])
    outs = [line for line in lines if line[len(prefix):].startswith("out")]
    assert outs == [f"{prefix}out {i}" for i in range(300)]
