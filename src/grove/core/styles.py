"""ANSI styling for terminal output.

Rendering is a pure transform: in plain mode text comes back unchanged.
"""
from __future__ import annotations


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"


def render(text: str, style: str, *, plain: bool = False) -> str:
    if plain or not style or not text:
        return text
    return f"{style}{text}{Colors.RESET}"


def dimmed(text: str, *, plain: bool = False) -> str:
    return render(text, Colors.DIM, plain=plain)


def bold(text: str, *, plain: bool = False) -> str:
    return render(text, Colors.BOLD, plain=plain)


def success(text: str, *, plain: bool = False) -> str:
    return render(text, Colors.GREEN, plain=plain)


def failure(text: str, *, plain: bool = False) -> str:
    return render(text, Colors.RED, plain=plain)


__all__ = ["Colors", "render", "dimmed", "bold", "success", "failure"]
