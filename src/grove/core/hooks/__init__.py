"""Hook execution: captured and streaming runners."""
from __future__ import annotations

from grove.core.hooks.runner import HookResult, RunResult, run_hooks
from grove.core.hooks.streaming import LineFramer, run_hooks_streaming

__all__ = ["HookResult", "RunResult", "run_hooks", "LineFramer", "run_hooks_streaming"]
