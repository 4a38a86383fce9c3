"""Coloured status lines for warnings and successes."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text

__all__ = ["warn", "success"]


def _emoji_disabled() -> bool:
    return "NO_EMOJI" in os.environ


def _emit(symbol: str, message: str, colour: str) -> None:
    console = Console(highlight=False)
    line = Text.assemble((symbol, colour), " ", (str(message), colour))
    console.print(line, soft_wrap=True)


def warn(message: str) -> None:
    """Print a red warning line prefixed by a warning sign."""
    symbol = "!" if _emoji_disabled() else "⚠️ "
    _emit(symbol, message, "red")


def success(message: str) -> None:
    """Print a green success line prefixed by a check mark."""
    symbol = "✓" if _emoji_disabled() else "✅"
    _emit(symbol, message, "green")