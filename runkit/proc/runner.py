"""
One-call helpers for the common ways build scripts run programs.
"""

from __future__ import annotations

import logging
import os
import shutil

from ..log import derive_lg, get_default_lg
from ..ui import yes_or_no
from .command import Command
from .protocol import Runnable


def _lg() -> logging.Logger:
    return derive_lg(get_default_lg(), "proc")


def cmd_sync(name: str, *args: str) -> bool:
    """Run a command and wait for it; True on exit status 0."""
    return Command(name, *args).run()


def cmd_sync_cd(directory: str | os.PathLike, name: str, *args: str) -> bool:
    """Run a command in another working directory and wait for it."""
    return Command(name, *args, cwd=directory).run()


def cmd_async(name: str, *args: str) -> tuple[Command, bool]:
    """
    Start a command without waiting.

    Returns:
        The handle and whether the process was started. The handle is
        returned either way so a failed start can be inspected via its
        ``error``.
    """
    cmd = Command(name, *args)
    return cmd, cmd.start()


def search_program(name: str) -> tuple[str | None, bool]:
    """
    Look up an executable on PATH.

    Returns:
        (path, True) when found, (None, False) otherwise; a missing program
        is logged as an error
    """
    path = shutil.which(name)
    if path is None:
        _lg().error("executable file not found in PATH", extra={"program": name})
        return None, False
    return path, True


def maybe_install_program(name: str, installer: Runnable, **prompt_kwargs) -> bool:
    """
    Ensure a program is on PATH, offering to run an installer if it is not.

    Args:
        name: Program to look for
        installer: Command or pipeline that installs the program
        **prompt_kwargs: Passed to ``yes_or_no`` (stream, console, auto_confirm)

    Returns:
        True if the program was already present or the installer succeeded
    """
    _, found = search_program(name)
    if found:
        return True
    question = f'"{name}" is not installed. Do you want to install it? (y/n): '
    if not yes_or_no(question, **prompt_kwargs):
        return False
    return installer.run()
