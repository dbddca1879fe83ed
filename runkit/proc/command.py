"""
Process handle for one external command.

A Command owns the argument vector, the working directory, the three
standard-stream endpoints and, once started, the OS process. Every command
is started in a new process group so ``kill_group()`` also reaches the
processes the command itself spawns.

Stream endpoints may be:
- ``None``: inherit the parent's stream (stdin only; stdout and stderr
  default to the logger at info and error level)
- an ``int`` file descriptor, or a file object with a working ``fileno()``:
  handed to the child directly
- ``bytes``/``str`` (stdin only): fed to the child, then stdin is closed
- any other object with ``read()`` (stdin) or ``write()`` (stdout/stderr):
  bridged through a pipe by a pump thread
"""

from __future__ import annotations

import codecs
import io
import logging
import os
import signal
import subprocess
import threading
from collections.abc import Callable
from typing import IO, Any

from ..exceptions import CommandStateError
from ..log import LogStream, derive_lg, get_default_lg
from .errors import ProcessError

_CHUNK_SIZE = 64 * 1024


def _direct_fd(target: Any) -> int | None:
    """Return a file descriptor the child can use directly, if target has one."""
    if isinstance(target, bool):
        return None
    if isinstance(target, int):
        return target
    fileno = getattr(target, "fileno", None)
    if fileno is None:
        return None
    try:
        return int(fileno())
    except (OSError, ValueError, io.UnsupportedOperation):
        # e.g. StringIO, or a captured sys.stdout
        return None


class Command:
    """
    Handle for one external command invocation.

    Example:
        >>> cmd = Command("make", "all").set_cwd("build")
        >>> cmd.run()
        [..] [I] CMD: make all
        True

        >>> server = Command("python", "-m", "http.server")
        >>> server.start()
        True
        >>> server.kill_group()
        True
    """

    def __init__(
        self,
        name: str,
        *args: str,
        cwd: str | os.PathLike | None = None,
        stdin: Any = None,
        stdout: Any = None,
        stderr: Any = None,
        lg: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the command handle; nothing is started yet.

        Args:
            name: Program name or path
            *args: Program arguments
            cwd: Working directory override
            stdin: Input endpoint (see module docstring)
            stdout: Output endpoint, defaults to the logger at info level
            stderr: Error endpoint, defaults to the logger at error level
            lg: Logger for command lines, failures and forwarded output
        """
        self._lg = lg if lg is not None else derive_lg(get_default_lg(), "proc")
        self._name = name
        self._args = [str(a) for a in args]
        self._cwd = cwd
        self._stdin = stdin
        self._stdout = stdout if stdout is not None else LogStream(self._lg, logging.INFO)
        self._stderr = stderr if stderr is not None else LogStream(self._lg, logging.ERROR)

        self._process: subprocess.Popen | None = None
        self._spawned = False
        self._pgid: int | None = None
        self._pumps: list[threading.Thread] = []
        self._error: ProcessError | None = None
        self._waited = False

    # -- configuration (before start) -------------------------------------

    def _check_not_started(self, what: str) -> None:
        if self._spawned:
            raise CommandStateError(f"cannot set {what} after start", cmd=str(self))

    def set_cwd(self, directory: str | os.PathLike | None) -> Command:
        """Set the working directory. Returns self for chaining."""
        self._check_not_started("working directory")
        self._cwd = directory
        return self

    def set_stdin(self, stdin: Any) -> Command:
        """Set the input endpoint. Returns self for chaining."""
        self._check_not_started("stdin")
        self._stdin = stdin
        return self

    def set_stdout(self, stdout: Any) -> Command:
        """Set the output endpoint. Returns self for chaining."""
        self._check_not_started("stdout")
        self._stdout = stdout
        return self

    def set_stderr(self, stderr: Any) -> Command:
        """Set the error endpoint. Returns self for chaining."""
        self._check_not_started("stderr")
        self._stderr = stderr
        return self

    # -- introspection ----------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def args(self) -> list[str]:
        return list(self._args)

    @property
    def argv(self) -> list[str]:
        return [self._name, *self._args]

    @property
    def cwd(self) -> str | os.PathLike | None:
        return self._cwd

    @property
    def stdin(self) -> Any:
        return self._stdin

    @property
    def stdout(self) -> Any:
        return self._stdout

    @property
    def stderr(self) -> Any:
        return self._stderr

    @property
    def lg(self) -> logging.Logger:
        return self._lg

    @property
    def process(self) -> subprocess.Popen | None:
        """The OS process, or None before a successful start."""
        return self._process

    @property
    def started(self) -> bool:
        return self._process is not None

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def pgid(self) -> int | None:
        """Process group id captured at start."""
        return self._pgid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode if self._process is not None else None

    @property
    def error(self) -> ProcessError | None:
        """The last failure of this handle, if any."""
        return self._error

    def __str__(self) -> str:
        return " ".join(self.argv)

    def __repr__(self) -> str:
        return f"Command({str(self)!r}, pid={self.pid})"

    # -- lifecycle --------------------------------------------------------

    def run(self) -> bool:
        """
        Start the command and wait for it.

        Returns:
            True if the process started and exited with status 0
        """
        if not self.start():
            return False
        return self.wait() is None

    def start(self) -> bool:
        """
        Start the command without waiting.

        Logs ``CMD: <argv>`` before starting.

        Returns:
            False if the OS could not create the process

        Raises:
            CommandStateError: If this handle was already started
        """
        self._lg.info(f"CMD: {self}")
        return self.spawn()

    def spawn(self) -> bool:
        """Start the process without logging the command line (see start())."""
        if self._spawned:
            raise CommandStateError("command already started", cmd=str(self))

        # An unsupported endpoint leaves the handle unstarted
        stdin_arg, feed = self._resolve_input(self._stdin)
        stdout_arg, out_sink = self._resolve_output(self._stdout)
        stderr_arg, err_sink = self._resolve_output(self._stderr)
        self._spawned = True

        try:
            self._process = subprocess.Popen(
                self.argv,
                cwd=self._cwd,
                stdin=stdin_arg,
                stdout=stdout_arg,
                stderr=stderr_arg,
                process_group=0,
            )
        except (OSError, subprocess.SubprocessError) as e:
            cause = e if isinstance(e, OSError) else OSError(str(e))
            self._error = ProcessError.spawn_failed(str(self), cause)
            self._lg.error(
                "could not start command", extra={"cmd": str(self), "error": e}
            )
            return False

        self._pgid = self._process.pid
        self._start_pumps(feed, out_sink, err_sink)
        self._lg.debug("started", extra={"cmd": str(self), "pid": self._process.pid})
        return True

    def wait(self) -> ProcessError | None:
        """
        Block until the process exits.

        Returns:
            None on exit status 0, otherwise the ProcessError describing the
            failure (also for a handle whose start failed). A second call
            returns the first call's outcome without waiting again.

        Raises:
            CommandStateError: If the handle was never started
        """
        return self._wait(quiet=False)

    def kill_group(self) -> bool:
        """
        Send SIGTERM to the command's whole process group and wait for it.

        Returns:
            False if the group id cannot be resolved or the signal cannot be
            delivered
        """
        if self._process is None:
            self._lg.error("cannot kill a command that is not running", extra={"cmd": str(self)})
            return False

        pid = self._process.pid
        try:
            pgid = os.getpgid(pid)
        except OSError as e:
            self._error = ProcessError.signal_failed(str(self), e, pid=pid)
            self._lg.error(
                "could not get pgid of process", extra={"pid": pid, "error": e}
            )
            return False

        try:
            os.killpg(pgid, signal.SIGTERM)
        except OSError as e:
            self._error = ProcessError.signal_failed(str(self), e, pgid=pgid)
            self._lg.error("could not kill pgid", extra={"pgid": pgid, "error": e})
            return False

        self._lg.debug("sent SIGTERM to process group", extra={"pgid": pgid})
        self._wait(quiet=True)
        return True

    def _wait(self, quiet: bool) -> ProcessError | None:
        if not self._spawned:
            raise CommandStateError("command not started", cmd=str(self))
        if self._process is None or self._waited:
            return self._error

        try:
            returncode = self._process.wait()
        except OSError as e:
            self._error = ProcessError.wait_failed(str(self), e)
            self._lg.error("could not wait for command", extra={"cmd": str(self), "error": e})
            return self._error
        finally:
            self._waited = True

        for pump in self._pumps:
            pump.join()

        if returncode != 0:
            self._error = ProcessError.non_zero_exit(str(self), returncode)
            if not quiet:
                self._lg.error("command failed", extra={"cmd": str(self), "code": returncode})
            return self._error

        self._lg.debug("exited", extra={"cmd": str(self)})
        return None

    # -- stream plumbing --------------------------------------------------

    def _resolve_input(self, target: Any) -> tuple[Any, Callable[[IO[bytes]], None] | None]:
        if target is None:
            return None, None
        fd = _direct_fd(target)
        if fd is not None:
            return fd, None
        if isinstance(target, (bytes, str)):
            data = target.encode() if isinstance(target, str) else target
            return subprocess.PIPE, lambda dst: self._feed_bytes(data, dst)
        if hasattr(target, "read"):
            return subprocess.PIPE, lambda dst: self._feed_reader(target, dst)
        raise CommandStateError(
            f"unsupported stdin endpoint: {type(target).__name__}", cmd=str(self)
        )

    def _resolve_output(self, target: Any) -> tuple[Any, Any]:
        fd = _direct_fd(target)
        if fd is not None:
            return fd, None
        if hasattr(target, "write"):
            return subprocess.PIPE, target
        raise CommandStateError(
            f"unsupported output endpoint: {type(target).__name__}", cmd=str(self)
        )

    def _start_pumps(self, feed: Any, out_sink: Any, err_sink: Any) -> None:
        assert self._process is not None
        jobs: list[tuple[str, Callable[[], None]]] = []
        if feed is not None and self._process.stdin is not None:
            stdin = self._process.stdin
            jobs.append(("stdin", lambda: feed(stdin)))
        if out_sink is not None and self._process.stdout is not None:
            stdout = self._process.stdout
            jobs.append(("stdout", lambda: _drain(stdout, out_sink)))
        if err_sink is not None and self._process.stderr is not None:
            stderr = self._process.stderr
            jobs.append(("stderr", lambda: _drain(stderr, err_sink)))

        for stream_name, job in jobs:
            pump = threading.Thread(
                target=job, name=f"runkit-{stream_name}-{self._process.pid}", daemon=True
            )
            pump.start()
            self._pumps.append(pump)

    def _feed_bytes(self, data: bytes, dst: IO[bytes]) -> None:
        try:
            dst.write(data)
        except BrokenPipeError:
            self._lg.debug("child closed stdin early", extra={"cmd": str(self)})
        finally:
            _close_quietly(dst)

    def _feed_reader(self, src: Any, dst: IO[bytes]) -> None:
        try:
            while True:
                chunk = src.read(_CHUNK_SIZE)
                if not chunk:
                    break
                dst.write(chunk.encode() if isinstance(chunk, str) else chunk)
        except BrokenPipeError:
            self._lg.debug("child closed stdin early", extra={"cmd": str(self)})
        finally:
            _close_quietly(dst)


def _drain(src: IO[bytes], sink: Any) -> None:
    """Copy everything from a child's pipe into sink, then flush sink."""
    decoder = None
    if isinstance(sink, io.TextIOBase):
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    fd = src.fileno()
    try:
        while True:
            chunk = os.read(fd, _CHUNK_SIZE)
            if not chunk:
                break
            sink.write(decoder.decode(chunk) if decoder is not None else chunk)
        if decoder is not None:
            tail = decoder.decode(b"", final=True)
            if tail:
                sink.write(tail)
    finally:
        src.close()
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()


def _close_quietly(stream: IO[bytes]) -> None:
    try:
        stream.close()
    except BrokenPipeError:
        # Flushing buffered data into a pipe the child already closed
        pass
