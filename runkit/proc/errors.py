"""
Structured process failures.

Public operations collapse every failure to ``False``; the ProcessError
describing what went wrong is logged and kept on the handle for callers
that want the detail.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..exceptions import RunkitError


class ErrorKind(Enum):
    """What went wrong with an external process."""

    SPAWN_FAILED = "spawn_failed"
    NON_ZERO_EXIT = "non_zero_exit"
    SIGNAL_FAILED = "signal_failed"
    WAIT_FAILED = "wait_failed"
    WALK_FAILED = "walk_failed"


class ProcessError(RunkitError):
    """
    Failure of an external process or of an operation on it.

    Attributes:
        kind: ErrorKind of the failure
        command: Joined command line the failure belongs to
        returncode: Exit status for NON_ZERO_EXIT (negative for a signal)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        command: str | None = None,
        returncode: int | None = None,
        **context: Any,
    ) -> None:
        if command is not None:
            context["cmd"] = command
        if returncode is not None:
            context["code"] = returncode
        super().__init__(message, **context)
        self.kind = kind
        self.command = command
        self.returncode = returncode

    @classmethod
    def spawn_failed(cls, command: str, cause: OSError) -> ProcessError:
        return cls(ErrorKind.SPAWN_FAILED, f"could not start: {cause}", command)

    @classmethod
    def non_zero_exit(cls, command: str, returncode: int) -> ProcessError:
        return cls(
            ErrorKind.NON_ZERO_EXIT, "exited with non-zero status", command, returncode
        )

    @classmethod
    def signal_failed(cls, command: str, cause: OSError, **context: Any) -> ProcessError:
        return cls(
            ErrorKind.SIGNAL_FAILED, f"could not signal: {cause}", command, **context
        )

    @classmethod
    def wait_failed(cls, command: str, cause: OSError) -> ProcessError:
        return cls(ErrorKind.WAIT_FAILED, f"could not wait: {cause}", command)

    @classmethod
    def walk_failed(cls, root: str, cause: OSError) -> ProcessError:
        return cls(ErrorKind.WALK_FAILED, f"could not walk directory: {cause}", root=root)
