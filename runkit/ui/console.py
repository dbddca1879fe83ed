"""
Rich console factory for runkit's user-facing output.

Log records go through runkit.log; the console is for output the user asked
for (resolved program paths, prompts).
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.theme import Theme

RUNKIT_THEME = {
    "info": "cyan",
    "warning": "yellow",
    "error": "red bold",
    "success": "green",
    "muted": "dim",
    "prompt": "bold",
}


def _should_use_color() -> bool:
    """Determine if color output should be used."""
    # https://no-color.org/
    if os.environ.get("NO_COLOR"):
        return False
    return True


def get_console(file: Any = None, no_color: bool | None = None) -> Console:
    """
    Create a themed rich Console.

    Args:
        file: Output file (default: sys.stdout)
        no_color: Disable colors; None honours the NO_COLOR environment variable

    Returns:
        rich.console.Console
    """
    if no_color is None:
        no_color = not _should_use_color()
    return Console(
        file=file,
        no_color=no_color,
        highlight=False,
        theme=Theme(RUNKIT_THEME),
    )
