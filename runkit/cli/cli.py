#!/usr/bin/env python3
"""
runkit CLI - run programs, pipelines and watch loops from the shell.

Usage:
    runkit run -- make all
    runkit run --cd build -- ninja
    runkit pipe "git log --oneline" "grep fix"
    runkit watch -p '*.go' -i 'vendor/*' -- go run .
    runkit which go
"""

from __future__ import annotations

import argparse
import sys

import runkit
from runkit.cli.tools import PipeTool, RunTool, Tool, WatchTool, WhichTool
from runkit.config import Config, RunkitConfig, validate_config
from runkit.exceptions import ConfigError, LoggingError
from runkit.log import create_root_lg, derive_lg, set_default_lg
from runkit.ui import get_console

# All CLI tools
_TOOLS: list[type[Tool]] = [
    RunTool,
    PipeTool,
    WatchTool,
    WhichTool,
]


def build_parser(tools: list[Tool]) -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per tool."""
    parser = argparse.ArgumentParser(
        prog="runkit", description="Run external programs, pipelines and watch loops"
    )
    parser.add_argument("--version", action="version", version=f"runkit {runkit.__version__}")
    parser.add_argument("--config", metavar="FILE", help="YAML config (default: ./runkit.yaml)")
    parser.add_argument(
        "--log-level", metavar="LEVEL",
        help="trace, debug, info, warning, error, critical or false",
    )
    parser.add_argument("--no-colors", action="store_true", help="Disable colored log output")

    subs = parser.add_subparsers(dest="command_name", metavar="COMMAND", required=True)
    for tool in tools:
        tool.register(subs)
    return parser


def load_settings(path: str | None) -> RunkitConfig:
    """Load and validate the configuration file (./runkit.yaml when path is None)."""
    config = Config(path) if path else Config.from_cwd()
    return validate_config(config.dict())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the runkit CLI."""
    tools = [tool_cls() for tool_cls in _TOOLS]
    args = build_parser(tools).parse_args(argv)
    console = get_console(file=sys.stderr)

    try:
        settings = load_settings(args.config)
    except (ConfigError, OSError) as e:
        console.print(f"[error]runkit: {e}[/error]")
        return 2

    log_conf = settings.logging
    try:
        lg = create_root_lg(
            args.log_level if args.log_level is not None else log_conf.level,
            colors=log_conf.colors and not args.no_colors,
            micros=log_conf.micros,
            location=log_conf.location,
        )
    except LoggingError as e:
        console.print(f"[error]runkit: {e}[/error]")
        return 2
    set_default_lg(lg)

    tool: Tool = args.tool
    tool.setup(derive_lg(lg, tool.name), settings)
    try:
        return tool.run(args)
    finally:
        set_default_lg(None)


if __name__ == "__main__":
    sys.exit(main())
