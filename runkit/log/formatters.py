"""
Log formatter for console output.

Renders records as:

    [2026-01-01 12:34:56,789] [I] CMD: make all                  [pid:4242] [/proc]

with structured extra fields in brackets, aligned to a fixed rule column,
and optional ANSI colors per level.
"""

import logging
import os
import re
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

EXTRA_ATTR = "__runkit__extra"

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def _visual_len(text: str) -> int:
    """Calculate visual width of text, excluding ANSI escape codes."""
    if "\x1b" not in text:
        return len(text)
    return len(_ANSI_PATTERN.sub("", text))


def _render_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return value.__class__.__name__ + (f": {value}" if str(value) else "")
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class LogFormatter(logging.Formatter):
    """
    Formatter with level colors, structured extra fields and location display.

    Extra fields passed as ``lg.info("msg", extra={"pid": 12})`` are stored
    on the record by runkit's Logger and rendered as ``[pid:12]``.
    """

    def __init__(self, config: LogConfig):
        super().__init__(LogConstants.DEFAULT_FORMAT)
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, datefmt)
        if self._config.micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        asctime = self.formatTime(record)
        level = record.levelname[:1]
        message = record.getMessage()
        head = f"[{asctime}] [{level}] {message}"

        fields = self._fields(record)
        meta = [f"[{record.name}]"]
        location = self._location(record)
        if location:
            meta.append(location)

        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        pad = " " * max(1, rule - _visual_len(head))

        if self._config.colors:
            out = self._colorize(record.levelno, head, pad, fields, meta)
        else:
            out = head + pad + " ".join(fields + meta)

        if record.exc_info:
            out += "\n" + self.formatException(record.exc_info)
        return out

    def _fields(self, record: logging.LogRecord) -> list[str]:
        extra = getattr(record, EXTRA_ATTR, None)
        if not extra:
            return []
        return [f"[{key}:{_render_value(extra[key])}]" for key in sorted(extra)]

    def _location(self, record: logging.LogRecord) -> str:
        if not self._config.location:
            return ""
        path = os.path.relpath(record.pathname, os.getcwd())
        return f"[./{path}:{record.lineno}]"

    def _colorize(
        self, levelno: int, head: str, pad: str, fields: list[str], meta: list[str]
    ) -> str:
        col = ColorManager.get_color_for_level(levelno)
        bold = ColorManager.create_bold_color(col)
        gray = ColorManager.create_gray_level(9) + "m"
        out = bold + head + ColorManager.RESET + pad
        if fields:
            out += col + "m" + " ".join(fields) + " "
        return out + gray + " ".join(meta) + ColorManager.RESET
