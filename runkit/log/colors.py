"""
ANSI color selection for log levels.
"""

import logging

from .constants import LogConstants


class ColorManager:
    """Centralized ANSI color code management."""

    RED = "\x1b[31"
    GREEN = "\x1b[32"
    YELLOW = "\x1b[33"
    MAGENTA = "\x1b[35"
    CYAN = "\x1b[36"
    DEFAULT = "\x1b[38"

    RESET = LogConstants.RESET

    COLORS: dict[int, str] = {
        LogConstants.CUSTOM_LEVELS["TRACE"]: "\x1b[38;5;24",
        logging.DEBUG: "\x1b[38;5;32",
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def get_color_for_level(level: int) -> str:
        """Return the color escape prefix for a level (default color if unknown)."""
        return ColorManager.COLORS.get(level, ColorManager.DEFAULT)

    @staticmethod
    def create_gray_level(level: int) -> str:
        """
        Create a gray color escape prefix.

        Args:
            level: Gray level, clamped to 0-23

        Returns:
            Gray color escape prefix (without the trailing "m")
        """
        level = max(0, min(level, LogConstants.GRAY_MAX_LEVELS - 1))
        return f"\x1b[38;5;{LogConstants.GRAY_BASE + level}"

    @staticmethod
    def create_bold_color(base_color: str) -> str:
        """Create the bold, terminated version of a color prefix."""
        return f"{base_color};1m"
