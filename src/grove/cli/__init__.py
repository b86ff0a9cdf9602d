"""
Grove CLI package.

Commands are auto-discovered from domain subfolders (config/, hooks/).
Each command module exposes ``SUMMARY``, ``register_args(parser)`` and
``main(args) -> int``.
"""
from ._output import OutputFormatter
from ._args import add_directory_flag, add_force_flag, add_json_flag
from ._utils import get_directory, load_settings, load_state

__all__ = [
    "OutputFormatter",
    "add_directory_flag",
    "add_force_flag",
    "add_json_flag",
    "get_directory",
    "load_settings",
    "load_state",
]
