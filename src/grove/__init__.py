"""
Grove - layered project settings and worktree lifecycle hooks

Grove resolves effective settings from a per-project ``.grove.yaml``, the
project's git config and bundled defaults, and runs the hook commands a
project declares for worktree creation.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
