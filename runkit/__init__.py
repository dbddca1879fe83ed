from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    CommandStateError,
    ConfigError,
    LoggingError,
    RunkitError,
    WatchError,
)
from .proc import (
    Command,
    ErrorKind,
    Pipeline,
    ProcessError,
    Runnable,
    cmd_async,
    cmd_sync,
    cmd_sync_cd,
    maybe_install_program,
    search_program,
)
from .ui import yes_or_no
from .watch import ChangeWatcher, PatternSet, WatchLoop, watch

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("runkit")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Processes
    "Command",
    "Pipeline",
    "Runnable",
    "cmd_async",
    "cmd_sync",
    "cmd_sync_cd",
    "search_program",
    "maybe_install_program",
    "yes_or_no",
    # Watch mode
    "ChangeWatcher",
    "PatternSet",
    "WatchLoop",
    "watch",
    # Errors
    "CommandStateError",
    "ConfigError",
    "ErrorKind",
    "LoggingError",
    "ProcessError",
    "RunkitError",
    "WatchError",
]
