"""Tests for the runkit exception hierarchy."""

import pytest

from runkit.exceptions import (
    CommandStateError,
    ConfigError,
    LoggingError,
    RunkitError,
    WatchError,
)

pytestmark = pytest.mark.unit


class TestRunkitError:
    """Tests for RunkitError."""

    def test_message_only(self):
        """Test str without context."""
        err = RunkitError("something broke")
        assert str(err) == "something broke"
        assert err.message == "something broke"
        assert err.context == {}

    def test_context_rendered(self):
        """Test context is appended in insertion order."""
        err = RunkitError("cannot start", cmd="make", code=2)
        assert str(err) == "cannot start (cmd=make, code=2)"

    @pytest.mark.parametrize(
        "cls", [ConfigError, LoggingError, CommandStateError, WatchError]
    )
    def test_subclasses(self, cls):
        """Test every runkit error is caught by the base class."""
        with pytest.raises(RunkitError):
            raise cls("x")
