"""Utility helpers for Grove core.

- io/: File I/O operations (atomic writes, YAML)
- subprocess: Subprocess wrappers
- text: Boolean parsing
- duration: Human-friendly durations
- merge: Deep merge for layered settings
"""
