"""
Grove hooks run command.

SUMMARY: Run the add or create hooks declared in .grove.yaml

Hooks run in order in the project directory and stop at the first failure.
With ``--stream`` their output is printed live, each line prefixed with the
command that produced it.
"""

from __future__ import annotations

import argparse
import sys

from grove.cli import OutputFormatter, add_directory_flag, add_json_flag, get_directory, load_state
from grove.core import styles
from grove.core.exceptions import GroveError
from grove.core.hooks import RunResult, run_hooks, run_hooks_streaming

SUMMARY = "Run the add or create hooks declared in .grove.yaml"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "kind",
        choices=["add", "create"],
        help="Which hook list to run",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Stream hook output live instead of capturing it",
    )
    add_directory_flag(parser)
    add_json_flag(parser)


def _report_text(formatter: OutputFormatter, result: RunResult, plain: bool) -> None:
    for command in result.succeeded:
        formatter.text(f"{styles.success('ok', plain=plain)} {command}")
    failed = result.failed
    if failed is None:
        return
    formatter.text(f"{styles.failure('failed', plain=plain)} {failed.command} (exit code {failed.exit_code})")
    if failed.stdout:
        formatter.text(failed.stdout.rstrip("\n"))
    if failed.stderr:
        formatter.text(failed.stderr.rstrip("\n"))


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    directory = get_directory(args)

    try:
        state, resolver = load_state(args)
    except GroveError as e:
        formatter.error(e, error_code="config_error")
        return 1

    file_config = resolver.file_config
    if resolver.file_error is not None:
        formatter.error(resolver.file_error, error_code="config_error")
        return 1
    commands = file_config.hooks_add if args.kind == "add" else file_config.hooks_create
    if not commands:
        formatter.success({"kind": args.kind, **RunResult().to_dict()}, f"No {args.kind} hooks configured")
        return 0

    plain = state.is_plain()
    if args.stream:
        # Keep stdout clean for the JSON document.
        sink = sys.stderr if formatter.json_mode else sys.stdout
        result = run_hooks_streaming(directory, commands, sink, plain=plain)
    else:
        result = run_hooks(directory, commands)

    if formatter.json_mode:
        formatter.json_output({"kind": args.kind, "ok": result.ok, **result.to_dict()})
    else:
        _report_text(formatter, result, plain)

    return 0 if result.ok else result.failed.exit_code
