"""
Interactive yes/no confirmation.

Reads exactly one line of input. Case-insensitive "y" or "yes" is an
affirmative answer; anything else, including an empty line or end of input,
is negative. Setting RUNKIT_YES=1 answers every prompt with yes, which is
how unattended build scripts skip confirmation.
"""

from __future__ import annotations

import os
from typing import IO

from rich.console import Console

from .console import get_console

AFFIRMATIVE = ("y", "yes")


def _get_auto_confirm() -> bool:
    """Check if auto-confirm is enabled via environment."""
    return os.environ.get("RUNKIT_YES", "").lower() in ("1", "true", "yes")


def is_affirmative(answer: str) -> bool:
    """Return True for a case-insensitive "y" or "yes" answer."""
    return answer.strip().lower() in AFFIRMATIVE


def yes_or_no(
    text: str,
    *,
    stream: IO[str] | None = None,
    console: Console | None = None,
    auto_confirm: bool | None = None,
) -> bool:
    """
    Print a prompt and read a single line as a yes/no answer.

    Args:
        text: Prompt text, printed without a trailing newline
        stream: Input stream to read the line from (default: standard input)
        console: Console to print the prompt on
        auto_confirm: Override auto-confirm behavior (None = RUNKIT_YES)

    Returns:
        True only for "y"/"yes" (case-insensitive)
    """
    if auto_confirm is True or (auto_confirm is None and _get_auto_confirm()):
        return True

    console = console or get_console()
    try:
        answer = console.input(text, markup=False, stream=stream)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return False
    return is_affirmative(answer)
