"""Coloured status lines for warnings and successes."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text


def _emoji_disabled() -> bool:
    return os.environ.get("NO_EMOJI") is not None


def _emit(mark: str, message: str, colour: str) -> None:
    line = Text(mark, style=colour)
    line.append(" ")
    line.append(message, style=colour)
    Console(highlight=False, soft_wrap=True).print(line)


def warn(message: str) -> None:
    """Print a red warning line."""
    _emit("!" if _emoji_disabled() else "⚠️ ", message, "red")


def success(message: str) -> None:
    """Print a green success line."""
    _emit("✓" if _emoji_disabled() else "✅", message, "green")