"""
Ticker for fixed-interval polling loops.

Example Usage:
    with Ticker(lg, secs=0.1) as ticker:
        for tick in ticker:
            poll()
            # Stops gracefully on SIGTERM/SIGINT
"""

import signal
import threading
from collections.abc import Iterator
from types import FrameType
from typing import Any


class Ticker:
    """
    Iterator yielding a tick count every ``secs`` seconds until stopped.

    The wait between ticks is an Event wait, so ``stop()`` from another
    thread or from a signal handler ends the iteration without waiting for
    the rest of the interval.

    Used as a context manager, SIGTERM and SIGINT stop the ticker and the
    previous signal handlers are restored on exit. Signal handlers can only
    be installed from the main thread.
    """

    def __init__(self, lg: Any, secs: float, initial: bool = True) -> None:
        """
        Initialize the ticker.

        Args:
            lg: Logger instance
            secs: Interval between ticks in seconds
            initial: Whether to yield immediately (default True). If False,
                     the first tick comes after one interval.
        """
        if secs <= 0:
            raise ValueError(f"ticker interval must be positive, got {secs}")
        self._lg = lg
        self._secs = secs
        self._initial = initial
        self._stop_event = threading.Event()
        self._running = False
        self._prev_sigterm: Any = None
        self._prev_sigint: Any = None

    @property
    def secs(self) -> float:
        return self._secs

    def stop(self) -> None:
        """Stop the ticker; the current iteration ends at the next wait."""
        self._stop_event.set()

    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def is_running(self) -> bool:
        """Check whether an iteration is in progress."""
        return self._running

    def __enter__(self) -> "Ticker":
        """Install signal handlers for graceful shutdown."""
        self._prev_sigterm = signal.signal(signal.SIGTERM, self._handle_signal)
        self._prev_sigint = signal.signal(signal.SIGINT, self._handle_signal)
        return self

    def __exit__(self, *args: object) -> None:
        """Restore previous signal handlers."""
        if self._prev_sigterm is not None:
            signal.signal(signal.SIGTERM, self._prev_sigterm)
            self._prev_sigterm = None
        if self._prev_sigint is not None:
            signal.signal(signal.SIGINT, self._prev_sigint)
            self._prev_sigint = None

    def __iter__(self) -> Iterator[int]:
        """
        Yield tick count on each interval until stopped.

        Yields:
            int: Tick count starting from 0.
        """
        tick = 0
        if self._stop_event.is_set():
            return

        self._running = True
        try:
            if self._initial:
                yield tick
                tick += 1

            while not self._stop_event.wait(timeout=self._secs):
                yield tick
                tick += 1
        finally:
            self._running = False

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        """Handle signal by stopping iteration."""
        sig_name = signal.Signals(signum).name
        self._lg.debug(f"received {sig_name}, stopping ticker")
        self._stop_event.set()
