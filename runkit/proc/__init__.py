"""
Running external programs: single commands, pipelines and helpers.
"""

from .command import Command
from .errors import ErrorKind, ProcessError
from .pipeline import Pipeline
from .protocol import Runnable
from .runner import (
    cmd_async,
    cmd_sync,
    cmd_sync_cd,
    maybe_install_program,
    search_program,
)

__all__ = [
    "Command",
    "ErrorKind",
    "Pipeline",
    "ProcessError",
    "Runnable",
    "cmd_async",
    "cmd_sync",
    "cmd_sync_cd",
    "maybe_install_program",
    "search_program",
]
