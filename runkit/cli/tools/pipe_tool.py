"""Run a pipeline of programs."""

from __future__ import annotations

import argparse
import shlex

from ...proc import Command, Pipeline
from .base import Tool, ToolConfig


class PipeTool(Tool):
    """Connect programs stdout to stdin, like a shell pipeline."""

    def _create_config(self) -> ToolConfig:
        return ToolConfig(
            name="pipe",
            help_text="Run programs connected by pipes",
            description=(
                'Each argument is one stage, split like a shell would: '
                'runkit pipe "git log --oneline" "grep fix" "wc -l"'
            ),
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("stages", nargs="+", metavar="CMD", help="Quoted command line")

    def run(self, args: argparse.Namespace) -> int:
        commands = []
        for stage in args.stages:
            try:
                argv = shlex.split(stage)
            except ValueError as e:
                self.lg.error("could not parse stage", extra={"stage": stage, "error": e})
                return 2
            if not argv:
                self.lg.error("empty pipeline stage")
                return 2
            commands.append(Command(*argv, lg=self.lg))
        return 0 if Pipeline(*commands, lg=self.lg).run() else 1
