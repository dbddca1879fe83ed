"""
Unix-style pipelines of external commands.

Each adjacent pair of commands is linked through its own OS pipe. Stages are
started left to right, so data streams through the pipeline while upstream
stages are still running. Waits also run left to right; the parent's copy of
a channel's write end is closed only after the producing stage exited
successfully, which is what lets the consumer see end-of-input.
"""

from __future__ import annotations

import logging
import os

from ..exceptions import CommandStateError
from ..log import derive_lg, get_default_lg
from .command import Command
from .errors import ProcessError


class Pipeline:
    """
    Ordered sequence of commands connected stdout to stdin.

    Example:
        >>> Pipeline(Command("git", "log"), Command("grep", "fix")).run()
        [..] [I] CMD: git log | grep fix
        True
    """

    def __init__(self, *commands: Command, lg: logging.Logger | None = None) -> None:
        if not commands:
            raise CommandStateError("pipeline needs at least one command")
        self._commands = list(commands)
        self._lg = lg if lg is not None else derive_lg(get_default_lg(), "proc")
        self._error: ProcessError | None = None
        self._open_fds: set[int] = set()

    @property
    def commands(self) -> list[Command]:
        return list(self._commands)

    @property
    def error(self) -> ProcessError | None:
        """Failure of the first stage that failed, if any."""
        return self._error

    def __str__(self) -> str:
        return " | ".join(str(cmd) for cmd in self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def run(self) -> bool:
        """
        Run the pipeline to completion.

        Returns:
            True if every stage started and exited with status 0

        Raises:
            CommandStateError: If a stage was already started
        """
        self._lg.info(f"CMD: {self}")
        try:
            channels = self._wire()
            if self._start_stages(channels) is None:
                return False
            return self._wait_stages(channels)
        finally:
            for fd in list(self._open_fds):
                self._close(fd)

    def _wire(self) -> list[tuple[int, int]]:
        """Allocate one pipe per adjacent pair and point the stages at it."""
        channels: list[tuple[int, int]] = []
        for producer, consumer in zip(self._commands, self._commands[1:]):
            read_fd, write_fd = os.pipe()
            self._open_fds.update((read_fd, write_fd))
            channels.append((read_fd, write_fd))
            producer.set_stdout(write_fd)
            consumer.set_stdin(read_fd)
        return channels

    def _start_stages(self, channels: list[tuple[int, int]]) -> list[Command] | None:
        started: list[Command] = []
        for i, cmd in enumerate(self._commands):
            self._lg.debug("starting stage", extra={"stage": i, "cmd": str(cmd)})
            ok = cmd.spawn()
            if i > 0:
                # Only the consumer reads from the channel
                self._close(channels[i - 1][0])
            if not ok:
                self._error = cmd.error
                self._abort(started)
                return None
            started.append(cmd)
        return started

    def _wait_stages(self, channels: list[tuple[int, int]]) -> bool:
        for i, cmd in enumerate(self._commands):
            error = cmd.wait()
            if error is not None:
                self._error = error
                self._abort(self._commands[i + 1 :])
                return False
            if i < len(channels):
                self._close(channels[i][1])
        return True

    def _abort(self, stages: list[Command]) -> None:
        """Close every remaining channel and terminate the given stages."""
        for fd in list(self._open_fds):
            self._close(fd)
        for cmd in stages:
            if cmd.started:
                self._lg.debug("terminating stage", extra={"cmd": str(cmd)})
                cmd.kill_group()

    def _close(self, fd: int) -> None:
        if fd in self._open_fds:
            self._open_fds.discard(fd)
            os.close(fd)
