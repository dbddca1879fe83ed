"""
Factory for creating and configuring runkit loggers.
"""

import logging
import sys
from typing import Any, TextIO

from .config import LogConfig
from .constants import LogConstants
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(
        config: LogConfig,
        stream: TextIO | None = None,
        logger_class: type[Logger] = Logger,
    ) -> Logger:
        """
        Create a root logger writing to a stream (stdout by default).

        Args:
            config: Logger configuration
            stream: Output stream for the console handler
            logger_class: Logger class to use

        Returns:
            Configured root logger

        Example:
            >>> lg = LoggerFactory.create_root(LogConfig.from_params("debug"))
            >>> lg.info("starting", extra={"pid": 42})
            [2026-01-01 12:34:56,789] [I] starting                    [pid:42] [/]
        """
        return LoggerFactory.create(LogConstants.ROOT_NAME, config, stream, logger_class)

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        stream: TextIO | None = None,
        logger_class: type[Logger] = Logger,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a standalone logger with its own console handler.

        Loggers are not registered with the logging module's manager, so two
        calls with the same name produce two independent loggers.
        """
        lg = logger_class(name, config, extra)
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        if config.level is not False:
            handler.setLevel(config.level)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a "view" logger that delegates to the root's handlers.

        Repeated derivation with the same tags returns the same logger.

        Examples:
            >>> derived = LoggerFactory.derive(root, "proc")
            >>> derived.name
            '/proc'
            >>> LoggerFactory.derive(root, ["watch", "loop"]).name
            '/watch/loop'

        Args:
            parent: Parent logger instance
            tags: Single tag or list of tags forming the hierarchy

        Returns:
            Derived logger instance
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name == "/" else parent.name + "/"
        name = prefix + "/".join(tags)

        if name in parent._children:
            return parent._children[name]

        root = parent._root_logger if parent._root_logger else parent
        lg = parent.__class__(name, parent.config)
        lg.setLevel(logging.NOTSET)
        lg._root_logger = root
        lg.parent = parent
        lg.propagate = False

        parent._children[name] = lg
        return lg
