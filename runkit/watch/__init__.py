"""
Watch mode: poll a directory tree and restart a program on changes.
"""

from .loop import DEFAULT_INTERVAL, State, WatchLoop, watch
from .patterns import PatternSet, match_glob
from .watcher import ChangeWatcher

__all__ = [
    "DEFAULT_INTERVAL",
    "ChangeWatcher",
    "PatternSet",
    "State",
    "WatchLoop",
    "match_glob",
    "watch",
]
