"""
Auto-discovery CLI dispatcher for grove.

Scans subfolders for commands and registers them automatically.
Adding a command means adding a .py file to the right domain folder.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from grove.core.config import UserSettings
from grove.core.config.state import ENV_DEBUG
from grove.core.exceptions import GroveError
from grove.core.logging import configure_logging
from grove.core.utils.text import is_env_truthy

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Discover CLI domain subfolders (config, hooks, ...)."""
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.is_dir() and not item.name.startswith("_"):
            has_commands = any(
                f.suffix == ".py" and not f.name.startswith("_")
                for f in item.iterdir()
            )
            if has_commands:
                domains[item.name] = item
    return domains


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """
    Discover all commands in a domain subfolder.

    Returns:
        Dict mapping command name to command info dict
    """
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}

    for item in domain_dir.glob("*.py"):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"grove.cli.{domain}.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import {domain}.{cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", f"{domain} {cmd_name}"),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    parser = argparse.ArgumentParser(
        prog="grove",
        description="Grove - git worktree workflow helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="domains",
        description="Available command domains",
        metavar="<domain>",
    )

    for domain_name in sorted(discover_domains().keys()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue

        domain_parser = subparsers.add_parser(
            domain_name,
            help=f"{domain_name.title()} commands",
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            description=f"Available {domain_name} commands",
            metavar="<command>",
        )

        for cmd_name, cmd_info in sorted(domain_commands.items()):
            primary_name = cmd_name.replace("_", "-")
            aliases = [cmd_name] if primary_name != cmd_name else []
            cmd_parser = cmd_subparsers.add_parser(
                primary_name,
                aliases=aliases,
                help=cmd_info["summary"],
            )
            if cmd_info["register_args"]:
                cmd_info["register_args"](cmd_parser)
            if cmd_info["main"]:
                cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from grove import __version__

    return __version__


def _bootstrap_settings() -> UserSettings:
    """Load user settings and install logging from them.

    A broken or invalid settings file does not stop the CLI: defaults are used
    and ``grove config validate`` reports the details.
    """
    configure_logging("WARNING")
    try:
        settings = UserSettings.load()
    except GroveError as exc:
        logger.warning("%s (using default settings)", exc)
        settings = UserSettings()
    else:
        if settings.issues():
            logger.warning(
                "settings file %s is invalid (using default settings); run 'grove config validate'",
                settings.source_path,
            )
            settings = UserSettings()

    level = "DEBUG" if is_env_truthy(os.environ.get(ENV_DEBUG)) else settings.log_level
    configure_logging(level, settings.log_file)
    return settings


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the grove CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    args._settings = _bootstrap_settings()

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except GroveError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
