"""
Polling file-change watcher.

The watcher remembers the instant of the last reported change as the
modification time of a sentinel file in the temp directory. A poll walks the
tree and reports a change as soon as it finds a tracked entry whose mtime is
strictly newer than the sentinel's; the sentinel is then recreated so the
same modification is reported only once.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable

from ..exceptions import WatchError
from ..log import derive_lg, get_default_lg
from ..proc.errors import ProcessError
from .patterns import PatternSet


def _raise(error: OSError) -> None:
    raise error


class ChangeWatcher:
    """
    Reports whether tracked files under a root changed since the last poll.

    Example:
        >>> with ChangeWatcher(".") as watcher:
        ...     watcher.check_for_change(["*.py"], ["venv", ".git"])
        False
    """

    def __init__(self, root: str | os.PathLike = ".", lg: logging.Logger | None = None) -> None:
        """
        Initialize the watcher. The sentinel is created on the first poll.

        Args:
            root: Directory tree to watch
            lg: Logger for walk and sentinel errors

        Raises:
            WatchError: If root is not a directory
        """
        self._root = os.fspath(root)
        if not os.path.isdir(self._root):
            raise WatchError("watch root is not a directory", root=self._root)
        self._lg = lg if lg is not None else derive_lg(get_default_lg(), "watch")
        self._sentinel: str | None = None
        self._error: ProcessError | None = None

    @property
    def root(self) -> str:
        return self._root

    @property
    def sentinel(self) -> str | None:
        """Path of the current sentinel file, None before the first poll."""
        return self._sentinel

    @property
    def error(self) -> ProcessError | None:
        """The walk failure of the last poll, if it failed."""
        return self._error

    def check_for_change(
        self,
        watched: PatternSet | Iterable[str],
        ignored: Iterable[str] = (),
    ) -> bool:
        """
        Walk the tree once and report whether a tracked entry changed.

        Args:
            watched: PatternSet, or watched base-name patterns
            ignored: Ignored patterns (when watched is not a PatternSet)

        Returns:
            True if an entry matching a watched pattern and no ignored pattern
            has an mtime strictly after the last reported change. Walk errors
            are logged and reported as no change.
        """
        if isinstance(watched, PatternSet):
            patterns = watched
        else:
            patterns = PatternSet.of(watched, ignored)

        if self._sentinel is None and not self._refresh_sentinel():
            return False
        try:
            reference = os.stat(self._sentinel).st_mtime_ns
        except OSError as e:
            self._lg.error("could not stat watch file", extra={"path": self._sentinel, "error": e})
            return False

        self._error = None
        try:
            changed = self._scan(patterns, reference)
        except OSError as e:
            self._error = ProcessError.walk_failed(self._root, e)
            self._lg.error("could not walk directory", extra={"root": self._root, "error": e})
            return False

        if changed:
            self._refresh_sentinel()
        return changed

    def _scan(self, patterns: PatternSet, reference: int) -> bool:
        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_raise):
            rel_dir = os.path.relpath(dirpath, self._root).replace(os.sep, "/")

            kept = []
            for name in dirnames:
                rel_path = name if rel_dir == "." else f"{rel_dir}/{name}"
                if patterns.is_ignored(rel_path, name):
                    continue
                if patterns.is_watched(name) and self._is_newer(
                    os.path.join(dirpath, name), reference
                ):
                    return True
                kept.append(name)
            # Ignored directories are not descended into
            dirnames[:] = kept

            for name in filenames:
                rel_path = name if rel_dir == "." else f"{rel_dir}/{name}"
                if patterns.is_tracked(rel_path, name) and self._is_newer(
                    os.path.join(dirpath, name), reference
                ):
                    self._lg.debug("change detected", extra={"path": rel_path})
                    return True
        return False

    def _is_newer(self, path: str, reference: int) -> bool:
        try:
            return os.lstat(path).st_mtime_ns > reference
        except FileNotFoundError:
            # Removed between listing and stat
            return False

    def _refresh_sentinel(self) -> bool:
        try:
            fd, path = tempfile.mkstemp(prefix="runkit")
        except OSError as e:
            self._lg.error("could not create temp file for watch mode", extra={"error": e})
            return False
        os.close(fd)
        self._remove_sentinel()
        self._sentinel = path
        return True

    def _remove_sentinel(self) -> None:
        if self._sentinel is None:
            return
        try:
            os.unlink(self._sentinel)
        except FileNotFoundError:
            pass
        self._sentinel = None

    def close(self) -> None:
        """Delete the sentinel file."""
        self._remove_sentinel()

    def __enter__(self) -> ChangeWatcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
