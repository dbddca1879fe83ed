"""
Line-oriented sink that forwards child process output into a logger.
"""

import codecs
import logging
import threading


class LogStream:
    """
    Writable sink that logs every complete line at a fixed level.

    Bytes or text may arrive in arbitrary chunks; partial lines are buffered
    until the newline arrives or ``flush()`` is called. Each command gets its
    own LogStream so output from different processes never merges within a
    line.

    Example:
        >>> out = LogStream(lg, logging.INFO)
        >>> out.write(b"compiling\\nlinking")
        >>> out.flush()
        [..] [I] compiling
        [..] [I] linking
    """

    def __init__(self, lg: logging.Logger, level: int = logging.INFO) -> None:
        self._lg = lg
        self._level = level
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._lock = threading.Lock()

    @property
    def level(self) -> int:
        return self._level

    def write(self, data: bytes | str) -> int:
        """Buffer data and log each complete line. Returns len(data)."""
        with self._lock:
            # Multibyte characters may be split across writes
            self._buffer += self._decoder.decode(data) if isinstance(data, bytes) else data
            *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            self._emit(line)
        return len(data)

    def flush(self) -> None:
        """Log any buffered partial line."""
        with self._lock:
            rest = self._buffer + self._decoder.decode(b"", final=True)
            self._buffer = ""
        if rest:
            self._emit(rest)

    def _emit(self, line: str) -> None:
        self._lg.log(self._level, line.rstrip("\r"))
