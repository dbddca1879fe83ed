"""
Watch-and-restart loop.

Keeps one child process running and restarts it, together with every process
it spawned, whenever the change watcher reports a change.
"""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable
from enum import Enum

from ..log import derive_lg, get_default_lg
from ..proc.command import Command
from ..time import Ticker
from .patterns import PatternSet
from .watcher import ChangeWatcher

DEFAULT_INTERVAL = 0.1


class State(Enum):
    RUNNING = "running"
    RESTARTING = "restarting"


class WatchLoop:
    """
    Poll for changes on a fixed interval and restart the child on each one.

    The loop runs until ``stop()`` is called or, when signal handling is
    enabled, the process receives SIGTERM or SIGINT. The running child's
    process group is terminated when the loop ends.

    Example:
        >>> with ChangeWatcher(".") as watcher:
        ...     loop = WatchLoop(watcher, PatternSet(["*.go"], ["vendor/*"]), "go", "run", ".")
        ...     loop.run()
    """

    def __init__(
        self,
        watcher: ChangeWatcher,
        patterns: PatternSet,
        name: str,
        *args: str,
        interval: float = DEFAULT_INTERVAL,
        lg: logging.Logger | None = None,
        handle_signals: bool = True,
    ) -> None:
        """
        Initialize the loop; the child is started by run().

        Args:
            watcher: Change watcher to poll
            patterns: Watched and ignored patterns
            name: Program to keep running
            *args: Program arguments
            interval: Seconds between polls
            lg: Logger for the loop and the child's output
            handle_signals: Stop on SIGTERM/SIGINT (main thread only)
        """
        self._watcher = watcher
        self._patterns = patterns
        self._name = name
        self._args = list(args)
        self._lg = lg if lg is not None else derive_lg(get_default_lg(), "watch")
        self._handle_signals = handle_signals
        self._ticker = Ticker(self._lg, secs=interval, initial=False)
        self._state = State.RUNNING
        self._child: Command | None = None
        self._restarts = 0

    @property
    def state(self) -> State:
        return self._state

    @property
    def child(self) -> Command | None:
        """Handle of the current child process."""
        return self._child

    @property
    def restarts(self) -> int:
        return self._restarts

    def run(self) -> None:
        """Start the child and poll until stopped."""
        self._child = self._spawn()
        self._state = State.RUNNING
        guard = self._ticker if self._handle_signals else contextlib.nullcontext(self._ticker)
        try:
            with guard as ticker:
                for _ in ticker:
                    self.poll()
        finally:
            self._terminate_child()
            self._lg.debug("watch loop stopped", extra={"restarts": self._restarts})

    def poll(self) -> bool:
        """Check for a change once and restart the child if there was one."""
        if not self._watcher.check_for_change(self._patterns):
            return False

        self._state = State.RESTARTING
        self._lg.info("change detected, restarting", extra={"restarts": self._restarts + 1})
        self._terminate_child()
        self._child = self._spawn()
        self._restarts += 1
        self._state = State.RUNNING
        return True

    def stop(self) -> None:
        """Stop the loop; safe to call from another thread."""
        self._ticker.stop()

    def _spawn(self) -> Command:
        cmd = Command(self._name, *self._args, lg=self._lg)
        # A failed start is logged by the handle; the next change retries
        cmd.start()
        return cmd

    def _terminate_child(self) -> None:
        child = self._child
        if child is None or not child.started or child.returncode is not None:
            return
        child.kill_group()


def watch(
    patterns: Iterable[str],
    ignored: Iterable[str],
    name: str,
    *args: str,
    interval: float = DEFAULT_INTERVAL,
    root: str | os.PathLike = ".",
    lg: logging.Logger | None = None,
) -> None:
    """
    Run a program and restart it whenever a watched file changes.

    Blocks until SIGTERM or SIGINT.

    Args:
        patterns: Base-name globs to watch (e.g. ``["*.go"]``)
        ignored: Path or base-name globs to skip (e.g. ``["vendor/*"]``)
        name: Program to run
        *args: Program arguments
        interval: Seconds between polls
        root: Directory tree to watch
        lg: Logger (defaults to a ``/watch`` view of the default logger)
    """
    with ChangeWatcher(root, lg=lg) as watcher:
        loop = WatchLoop(
            watcher, PatternSet.of(patterns, ignored), name, *args, interval=interval, lg=lg
        )
        loop.run()
