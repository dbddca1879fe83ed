"""
Logging for runkit.

Extends Python's standard logging with:
- A custom TRACE level below DEBUG
- Colored console output with an aligned column of structured fields
- Structured logging with extra fields (``extra={"pid": 42}``)
- Derived "view" loggers (``/proc``, ``/watch``) sharing the root's handlers
- LogStream, a line sink used to forward child process output

Log Level Control:
- Standard levels: debug, info, warning, error, critical
- Custom level: trace
- Disable logging completely: False or "false"
"""

import logging

from .colors import ColorManager
from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger
from .stream import LogStream

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")

_default_lg: Logger | None = None


def create_root_lg(
    level: str | int | bool = "info",
    colors: bool = True,
    micros: bool = False,
    location: bool | int = False,
) -> Logger:
    """
    Create a root logger writing to stdout.

    Example:
        >>> lg = create_root_lg("debug", colors=False)
    """
    config = LogConfig.from_params(level, location, micros, colors)
    return LoggerFactory.create_root(config)


def derive_lg(lg: Logger, tags: str | list[str]) -> Logger:
    """Derive a view logger with tags from a parent logger."""
    return LoggerFactory.derive(lg, tags)


def get_default_lg() -> Logger:
    """
    Return the process-wide fallback logger.

    Library functions called without an explicit logger log through this
    one. It is created lazily at info level; ``set_default_lg`` replaces it
    (the CLI installs its configured root logger here).
    """
    global _default_lg
    if _default_lg is None:
        _default_lg = create_root_lg("info")
    return _default_lg


def set_default_lg(lg: Logger | None) -> None:
    """Replace the fallback logger (None resets it to a lazy default)."""
    global _default_lg
    _default_lg = lg


__all__ = [
    "ColorManager",
    "InvalidLogLevelError",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LogStream",
    "Logger",
    "LoggerFactory",
    "create_root_lg",
    "derive_lg",
    "get_default_lg",
    "resolve_level",
    "set_default_lg",
]
