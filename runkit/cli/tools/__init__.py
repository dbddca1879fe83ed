"""Subcommands of the runkit CLI."""

from .base import Tool, ToolConfig
from .pipe_tool import PipeTool
from .run_tool import RunTool
from .watch_tool import WatchTool
from .which_tool import WhichTool

__all__ = ["PipeTool", "RunTool", "Tool", "ToolConfig", "WatchTool", "WhichTool"]
