"""
Grove config show command.

SUMMARY: Show effective project configuration

Prints every resolved setting for the project directory. With ``--sources``
each value is annotated with where it came from, and the settings search
path is listed.
"""

from __future__ import annotations

import argparse

from grove.cli import OutputFormatter, add_directory_flag, add_json_flag, get_directory, load_settings, load_state
from grove.core import styles
from grove.core.config import FILE_NAME, list_config_paths
from grove.core.exceptions import GroveError

SUMMARY = "Show effective project configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--sources",
        action="store_true",
        help="Annotate each value with its source and list settings search paths",
    )
    add_directory_flag(parser)
    add_json_flag(parser)


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(value) if value else "(none)"
    return str(value)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_settings(args)
        state, resolver = load_state(args, settings)
    except GroveError as e:
        formatter.error(e, error_code="config_error")
        return 1

    effective = state.config.to_dict()
    sources = {name: source.value for name, source in resolver.explain().items()} if args.sources else {}

    if formatter.json_mode:
        payload = {
            "directory": str(get_directory(args)),
            "config": effective,
            "file_error": str(resolver.file_error) if resolver.file_error else None,
        }
        if args.sources:
            payload["sources"] = sources
            payload["settings_file"] = str(settings.source_path) if settings.source_path else None
            payload["settings_paths"] = [
                {
                    "path": str(info.path),
                    "priority": info.priority,
                    "exists": info.exists,
                    "file": str(info.file) if info.file else None,
                }
                for info in list_config_paths()
            ]
        formatter.json_output(payload)
        return 0

    formatter.text(styles.bold(f"Configuration for {get_directory(args)}:", plain=state.is_plain()))
    for name, value in effective.items():
        suffix = f"  ({sources[name]})" if args.sources else ""
        formatter.text_kv(name, f"{_format_value(value)}{suffix}")

    if resolver.file_error:
        formatter.text(f"\nWarning: {FILE_NAME} could not be parsed and was ignored:")
        formatter.text(f"  {resolver.file_error}")

    if args.sources:
        formatter.text("\nSettings search path (highest priority first):")
        for info in list_config_paths():
            marker = str(info.file) if info.file else "(no settings file)"
            formatter.text(f"  {info.priority}. {info.path}  {marker}")
    return 0
