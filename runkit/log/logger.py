"""
Logger class for runkit.

Extends the standard Python logger with a TRACE level, structured extra
fields, and "view" loggers that share their root logger's handlers.
"""

import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants
from .formatters import EXTRA_ATTR


class Logger(logging.Logger):
    """
    Enhanced logger with structured extra fields.

    Extra fields are kept on the record as a dict rather than spread into
    record attributes, so keys like ``name`` or ``args`` never clash with
    LogRecord internals.
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: dict[str, Any] | None = None,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name ("/" for the root, "/proc" for derived loggers)
            config: Logger configuration, defaults to info level
            extra: Fields included in every record this logger emits
        """
        if config is None:
            config = LogConfig.from_params("info")

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False

        self._config = config
        self._extra = dict(extra or {})
        self._root_logger: Logger | None = None
        self._children: dict[str, Logger] = {}

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def logging_disabled(self) -> bool:
        return self._logging_disabled

    def isEnabledFor(self, level: int) -> bool:
        if self._logging_disabled:
            return False
        if not super().isEnabledFor(level):
            return False
        # Derived loggers also respect their parent's level
        if isinstance(self.parent, Logger):
            return self.parent.isEnabledFor(level)
        return True

    def makeRecord(
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        merged = dict(self._extra)
        if extra:
            merged.update(extra)
        setattr(record, EXTRA_ATTR, merged)
        return record

    def setLevel(self, level: int | str) -> None:
        """Set level and clear cached level checks of this logger and its views."""
        super().setLevel(level)
        self._clear_caches()

    def _clear_caches(self) -> None:
        # Loggers here are not registered with logging.Manager, so its cache
        # clearing never reaches them.
        self._cache.clear()  # type: ignore[attr-defined]
        for child in getattr(self, "_children", {}).values():
            child._clear_caches()

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message (below DEBUG).

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra'
        """
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """
        Pass a record to all relevant handlers.

        Derived "view" loggers have no handlers of their own and hand the
        record to the root logger's handlers instead.
        """
        if self._root_logger is not None:
            for handler in self._root_logger.handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        else:
            super().callHandlers(record)
