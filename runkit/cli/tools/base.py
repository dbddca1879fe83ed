"""
Base class for runkit subcommands.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Any

from ...config import RunkitConfig
from ...log import Logger


@dataclass
class ToolConfig:
    """Configuration for a tool."""

    name: str
    aliases: list[str] = field(default_factory=list)
    help_text: str = ""
    description: str = ""


class Tool:
    """
    A subcommand: declares its arguments and runs with the parsed namespace.

    Subclasses provide ``_create_config()`` (or pass a ToolConfig), override
    ``add_args()`` and ``run()``.
    """

    def __init__(self, config: ToolConfig | None = None) -> None:
        self.config = config if config is not None else self._create_config()
        self._lg: Logger | None = None
        self._settings: RunkitConfig | None = None

    def _create_config(self) -> ToolConfig:
        return ToolConfig(name=self.__class__.__name__.lower().removesuffix("tool"))

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def lg(self) -> Logger:
        if self._lg is None:
            raise RuntimeError(f"tool '{self.name}' used before setup()")
        return self._lg

    @property
    def settings(self) -> RunkitConfig:
        if self._settings is None:
            self._settings = RunkitConfig()
        return self._settings

    def register(self, subparsers: Any) -> argparse.ArgumentParser:
        """Add this tool's subparser and arguments."""
        parser = subparsers.add_parser(
            self.config.name,
            aliases=self.config.aliases,
            help=self.config.help_text,
            description=self.config.description or self.config.help_text,
        )
        self.add_args(parser)
        parser.set_defaults(tool=self)
        return parser

    def setup(self, lg: Logger, settings: RunkitConfig | None = None) -> None:
        """Attach the logger and validated configuration before run()."""
        self._lg = lg
        self._settings = settings

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments (none by default)."""
        pass

    def run(self, args: argparse.Namespace) -> int:
        """Execute the tool; returns the process exit code."""
        raise NotImplementedError


def program_args(values: list[str]) -> list[str]:
    """Strip the '--' separator argparse may leave in front of a REMAINDER."""
    if values and values[0] == "--":
        return values[1:]
    return values
