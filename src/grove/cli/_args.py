"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_directory_flag(parser: argparse.ArgumentParser) -> None:
    """Add --directory for the project directory (defaults to the cwd)."""
    parser.add_argument(
        "--directory",
        "-C",
        type=str,
        default=None,
        help="Project directory (default: current directory)",
    )


def add_force_flag(parser: argparse.ArgumentParser, help_text: str = "Overwrite existing files") -> None:
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help=help_text,
    )


__all__ = ["add_json_flag", "add_directory_flag", "add_force_flag"]
