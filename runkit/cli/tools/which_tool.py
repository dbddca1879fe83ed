"""Resolve a program on PATH."""

from __future__ import annotations

import argparse

from ...proc import search_program
from ...ui import get_console
from .base import Tool, ToolConfig


class WhichTool(Tool):
    """Print the full path of a program found on PATH."""

    def _create_config(self) -> ToolConfig:
        return ToolConfig(name="which", help_text="Locate a program on PATH")

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("program", help="Program name")

    def run(self, args: argparse.Namespace) -> int:
        path, found = search_program(args.program)
        if not found:
            return 1
        get_console().print(path, soft_wrap=True)
        return 0
