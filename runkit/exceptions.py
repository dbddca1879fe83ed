"""
Unified exception hierarchy for runkit.

Every runkit-specific exception inherits from RunkitError so callers can
catch all of them with a single except clause. Process-level failures are
normally reported as a boolean by the public run/start/kill operations; the
structured exceptions below are what gets logged and kept on the handle.
"""

from typing import Any


class RunkitError(Exception):
    """
    Base exception for all runkit errors.

    Example:
        try:
            config = Config("runkit.yaml")
        except RunkitError as e:
            lg.error(f"runkit error: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(RunkitError):
    """
    Configuration-related errors.

    Examples:
        - Config file too large
        - Invalid YAML syntax
        - Schema validation failed
    """

    pass


class LoggingError(RunkitError):
    """Logging-related errors (invalid level, bad handler setup)."""

    pass


class CommandStateError(RunkitError):
    """
    Raised when a command handle is used out of order.

    Examples:
        - Redirecting a stream after the process was started
        - Starting the same handle twice
        - Waiting on or killing a handle that was never started
    """

    pass


class WatchError(RunkitError):
    """Watch-mode errors such as a sentinel file that cannot be created."""

    pass
