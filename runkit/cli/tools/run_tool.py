"""Run one program and wait for it."""

from __future__ import annotations

import argparse

from ...proc import cmd_sync, cmd_sync_cd
from .base import Tool, ToolConfig, program_args


class RunTool(Tool):
    """Run a program synchronously with its output forwarded to the log."""

    def _create_config(self) -> ToolConfig:
        return ToolConfig(
            name="run",
            help_text="Run a program and wait for it",
            description="Run PROG ARGS, logging its output; exit 1 if it fails.",
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--cd", metavar="DIR", help="Working directory for the program")
        parser.add_argument("command", nargs=argparse.REMAINDER, help="-- PROG ARGS...")

    def run(self, args: argparse.Namespace) -> int:
        argv = program_args(args.command)
        if not argv:
            self.lg.error("no program given")
            return 2
        if args.cd:
            ok = cmd_sync_cd(args.cd, *argv)
        else:
            ok = cmd_sync(*argv)
        return 0 if ok else 1
