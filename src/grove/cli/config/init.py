"""
Grove config init command.

SUMMARY: Create a commented .grove.yaml template
"""

from __future__ import annotations

import argparse

from grove.cli import OutputFormatter, add_directory_flag, add_force_flag, add_json_flag, get_directory
from grove.core.config import FileConfigStore
from grove.core.config.file import config_path

SUMMARY = "Create a commented .grove.yaml template"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_force_flag(parser, help_text="Overwrite an existing .grove.yaml")
    add_directory_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    directory = get_directory(args)
    store = FileConfigStore()
    path = config_path(directory)

    if store.exists(directory) and not args.force:
        formatter.error(
            FileExistsError(str(path)),
            f"{path} already exists (use --force to overwrite)",
            error_code="exists",
        )
        return 1

    try:
        store.write_template(directory)
    except OSError as e:
        formatter.error(e, f"failed to write {path}: {e}", error_code="write_failed")
        return 1

    formatter.success({"path": str(path)}, f"Created {path}")
    return 0
