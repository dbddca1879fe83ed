"""
Configuration for runkit loggers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve a log level from a name, a number, or a boolean.

    Args:
        level: Level name ("info", "trace", ...), numeric level, numeric
               string, or a boolean (False disables logging, True means info)

    Returns:
        Numeric level, or False when logging is disabled

    Raises:
        InvalidLogLevelError: If the name is not a known level
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    name = str(level).strip().lower()
    if name.isnumeric():
        return int(name)
    if name in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[name]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for a root logger and its formatter.

    Derived loggers share their root's handlers, so these display settings
    apply to the whole logger tree.
    """

    level: int | bool = logging.INFO  # False disables logging
    location: int = 0
    micros: bool = False
    colors: bool = True

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        location: bool | int = 0,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (name, number, or False to disable logging)
            location: Show the calling file:line (bool or depth)
            micros: Whether to show microsecond precision
            colors: Whether to enable ANSI colors

        Returns:
            LogConfig instance
        """
        resolved_location = (
            1 if location is True else (0 if location is False else int(location))
        )
        return cls(
            level=resolve_level(level),
            location=resolved_location,
            micros=micros,
            colors=colors,
        )

    @classmethod
    def from_config(
        cls, config_dict: dict[str, Any], section: str = "logging"
    ) -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary (e.g. Config.dict())
            section: Dot-separated section holding the logging settings

        Returns:
            LogConfig instance; missing keys fall back to defaults
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break
        if not isinstance(current, dict):
            current = {}

        return cls.from_params(
            level=current.get("level", "info"),
            location=current.get("location", 0),
            micros=current.get("micros", False),
            colors=current.get("colors", True),
        )
