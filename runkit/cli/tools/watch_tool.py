"""Run a program and restart it whenever watched files change."""

from __future__ import annotations

import argparse

from ...exceptions import WatchError
from ...watch import watch
from .base import Tool, ToolConfig, program_args


class WatchTool(Tool):
    """Watch mode: poll the tree and restart the program on changes."""

    def _create_config(self) -> ToolConfig:
        return ToolConfig(
            name="watch",
            help_text="Restart a program when files change",
            description=(
                "Run PROG ARGS and restart it (with everything it spawned) when a "
                "file matching a --pattern changes. Stops on SIGINT/SIGTERM."
            ),
        )

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-p", "--pattern", action="append", dest="patterns", metavar="GLOB",
            help="Base-name glob to watch (repeatable; default: watch.patterns)",
        )
        parser.add_argument(
            "-i", "--ignore", action="append", dest="ignored", metavar="GLOB",
            help="Path or base-name glob to skip (repeatable; default: watch.ignore)",
        )
        parser.add_argument(
            "--interval", type=float, metavar="SECS",
            help="Poll interval in seconds (default: watch.interval)",
        )
        parser.add_argument("--root", metavar="DIR", help="Directory tree to watch")
        parser.add_argument("command", nargs=argparse.REMAINDER, help="-- PROG ARGS...")

    def run(self, args: argparse.Namespace) -> int:
        argv = program_args(args.command)
        if not argv:
            self.lg.error("no program given")
            return 2

        conf = self.settings.watch
        patterns = args.patterns or conf.patterns
        if not patterns:
            self.lg.error("no watch patterns given, use --pattern or watch.patterns")
            return 2
        interval = args.interval if args.interval is not None else conf.interval
        if interval <= 0:
            self.lg.error("interval must be positive", extra={"interval": interval})
            return 2

        try:
            watch(
                patterns,
                args.ignored or conf.ignore,
                *argv,
                interval=interval,
                root=args.root or conf.root,
                lg=self.lg,
            )
        except WatchError as e:
            self.lg.error("cannot watch", extra={"error": e})
            return 1
        return 0
