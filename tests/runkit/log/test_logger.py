"""
Tests for runkit's Logger, LoggerFactory and LogFormatter.
"""

import io
import logging
import re
import sys

import pytest

from runkit.log import (
    ColorManager,
    LogConfig,
    Logger,
    LoggerFactory,
    LogFormatter,
    create_root_lg,
    derive_lg,
    get_default_lg,
    set_default_lg,
)

pytestmark = pytest.mark.unit


def _root(level="debug", colors=False, micros=False, location=False):
    stream = io.StringIO()
    config = LogConfig.from_params(level, location=location, micros=micros, colors=colors)
    return LoggerFactory.create_root(config, stream=stream), stream


class TestLoggerFactory:
    """Tests for root creation and derivation."""

    def test_root_name(self):
        """Test the root logger is named '/'."""
        lg, _ = _root()
        assert lg.name == "/"
        assert isinstance(lg, Logger)
        assert lg.propagate is False

    def test_derive_names(self):
        """Test derived loggers are named after their tags."""
        lg, _ = _root()
        assert derive_lg(lg, "proc").name == "/proc"
        assert derive_lg(lg, ["watch", "loop"]).name == "/watch/loop"
        assert derive_lg(derive_lg(lg, "watch"), "loop").name == "/watch/loop"

    def test_derive_is_cached(self):
        """Test deriving the same tags twice returns the same logger."""
        lg, _ = _root()
        assert derive_lg(lg, "proc") is derive_lg(lg, "proc")

    def test_derived_writes_through_root_handlers(self):
        """Test view loggers use the root's stream."""
        lg, stream = _root()
        derive_lg(lg, "proc").info("from child")
        assert "from child" in stream.getvalue()
        assert "[/proc]" in stream.getvalue()

    def test_derived_respects_root_level(self):
        """Test changing the root level affects derived loggers."""
        lg, stream = _root("debug")
        child = derive_lg(lg, "proc")
        child.debug("visible")
        lg.setLevel(logging.WARNING)
        child.info("hidden")
        assert "visible" in stream.getvalue()
        assert "hidden" not in stream.getvalue()

    def test_not_registered_with_logging_manager(self):
        """Test roots are independent of logging.getLogger()."""
        _root()
        assert not isinstance(logging.root.manager.loggerDict.get("/"), Logger)


class TestLogger:
    """Tests for Logger behaviour."""

    def test_disabled_logging(self):
        """Test level False disables all output."""
        lg, stream = _root(False)
        lg.critical("nothing")
        assert lg.logging_disabled is True
        assert stream.getvalue() == ""

    def test_trace_level(self):
        """Test trace() emits below debug."""
        lg, stream = _root("trace")
        lg.trace("fine detail")
        assert "[T] fine detail" in stream.getvalue()

    def test_trace_filtered_at_debug(self):
        """Test trace() is suppressed at debug level."""
        lg, stream = _root("debug")
        lg.trace("fine detail")
        assert stream.getvalue() == ""

    def test_extra_fields_rendered_sorted(self):
        """Test structured fields are rendered as [key:value] in key order."""
        lg, stream = _root()
        lg.info("started", extra={"pid": 42, "cmd": "make all"})
        line = stream.getvalue()
        assert "[cmd:make all] [pid:42] [/]" in line

    def test_extra_keys_do_not_clash_with_record(self):
        """Test reserved LogRecord attribute names are usable as fields."""
        lg, stream = _root()
        lg.info("msg", extra={"name": "x", "args": "y"})
        assert "[args:y] [name:x]" in stream.getvalue()

    def test_exception_field(self):
        """Test exceptions render as type and message."""
        lg, stream = _root()
        lg.error("failed", extra={"error": FileNotFoundError("missing")})
        assert "[error:FileNotFoundError: missing]" in stream.getvalue()


class TestLogFormatter:
    """Tests for LogFormatter output."""

    def test_plain_format(self):
        """Test the plain layout."""
        lg, stream = _root()
        lg.info("CMD: make")
        line = stream.getvalue().rstrip("\n")
        assert re.match(r"^\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d,\d{3}\] \[I\] CMD: make +\[/\]$", line)

    def test_fields_aligned_to_rule(self):
        """Test fields start at the rule column for short messages."""
        lg, stream = _root()
        lg.info("short")
        line = stream.getvalue().rstrip("\n")
        assert line.index("[/]") == 70

    def test_micros(self):
        """Test microsecond timestamps."""
        lg, stream = _root(micros=True)
        lg.info("x")
        assert re.match(r"^\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d,\d{3}\.\d{3}\]", stream.getvalue())

    def test_location(self):
        """Test file:line is appended when enabled."""
        lg, stream = _root(location=True)
        lg.info("here")
        assert "test_logger.py:" in stream.getvalue()

    def test_colors(self):
        """Test ANSI codes per level when colors are enabled."""
        lg, stream = _root(colors=True)
        lg.error("boom")
        output = stream.getvalue()
        assert ColorManager.create_bold_color(ColorManager.RED) in output
        assert ColorManager.RESET in output

    def test_exc_info_appended(self):
        """Test tracebacks follow the record."""
        formatter = LogFormatter(LogConfig.from_params("info", colors=False))
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("/", logging.ERROR, __file__, 1, "failed", None, True)
            record.exc_info = sys.exc_info()
        assert "ValueError: bad" in formatter.format(record)


class TestDefaultLogger:
    """Tests for the process-wide fallback logger."""

    def test_lazy_default(self):
        """Test a default logger is created on demand."""
        lg = get_default_lg()
        assert lg is get_default_lg()
        assert lg.level == logging.INFO

    def test_set_default(self):
        """Test set_default_lg replaces and resets the fallback."""
        lg = create_root_lg("debug", colors=False)
        set_default_lg(lg)
        assert get_default_lg() is lg
        set_default_lg(None)
        assert get_default_lg() is not lg
