"""
Tests for the Ticker iterator.

Tests key functionality including:
- Interval validation
- Immediate and delayed first tick
- Stopping from another thread and from signal handlers
- Signal handler installation and restoration
"""

import logging
import signal
import threading
import time
from unittest.mock import Mock

import pytest

from runkit.time import Ticker

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Create mock logger for tests."""
    return Mock(spec=logging.Logger)


# =============================================================================
# Test Initialization
# =============================================================================


@pytest.mark.unit
class TestTickerInit:
    """Test Ticker construction."""

    def test_secs_exposed(self, mock_logger):
        """Test the interval is kept."""
        assert Ticker(mock_logger, secs=0.1).secs == 0.1

    @pytest.mark.parametrize("secs", [0, -0.5])
    def test_non_positive_interval_rejected(self, mock_logger, secs):
        """Test the interval must be positive."""
        with pytest.raises(ValueError):
            Ticker(mock_logger, secs=secs)

    def test_not_running_initially(self, mock_logger):
        """Test a fresh ticker is idle and not stopped."""
        ticker = Ticker(mock_logger, secs=0.1)
        assert ticker.is_running() is False
        assert ticker.stopped() is False


# =============================================================================
# Test Iteration
# =============================================================================


@pytest.mark.unit
class TestTickerIteration:
    """Test iterating a ticker."""

    def test_tick_counts(self, mock_logger):
        """Test ticks are numbered from zero."""
        ticker = Ticker(mock_logger, secs=0.001)
        ticks = []
        for tick in ticker:
            ticks.append(tick)
            if tick == 3:
                ticker.stop()
        assert ticks == [0, 1, 2, 3]
        assert ticker.is_running() is False

    def test_initial_tick_immediate(self, mock_logger):
        """Test the first tick does not wait when initial=True."""
        ticker = Ticker(mock_logger, secs=10)
        started = time.monotonic()
        for _ in ticker:
            ticker.stop()
        assert time.monotonic() - started < 1

    def test_initial_false_waits_one_interval(self, mock_logger):
        """Test the first tick comes after one interval when initial=False."""
        ticker = Ticker(mock_logger, secs=0.05, initial=False)
        started = time.monotonic()
        for _ in ticker:
            ticker.stop()
        assert time.monotonic() - started >= 0.05

    def test_stopped_ticker_yields_nothing(self, mock_logger):
        """Test iterating a stopped ticker ends immediately."""
        ticker = Ticker(mock_logger, secs=0.01)
        ticker.stop()
        assert list(ticker) == []

    def test_stop_from_other_thread(self, mock_logger):
        """Test stop() interrupts the wait between ticks."""
        ticker = Ticker(mock_logger, secs=10, initial=False)
        threading.Timer(0.05, ticker.stop).start()
        started = time.monotonic()
        assert list(ticker) == []
        assert time.monotonic() - started < 5


# =============================================================================
# Test Signal Handling
# =============================================================================


@pytest.mark.unit
class TestTickerSignals:
    """Test the context manager's signal handling."""

    def test_handlers_installed_and_restored(self, mock_logger):
        """Test SIGTERM/SIGINT handlers are swapped for the block only."""
        prev_term = signal.getsignal(signal.SIGTERM)
        prev_int = signal.getsignal(signal.SIGINT)
        with Ticker(mock_logger, secs=0.1) as ticker:
            assert signal.getsignal(signal.SIGTERM) == ticker._handle_signal
            assert signal.getsignal(signal.SIGINT) == ticker._handle_signal
        assert signal.getsignal(signal.SIGTERM) == prev_term
        assert signal.getsignal(signal.SIGINT) == prev_int

    def test_signal_stops_ticker(self, mock_logger):
        """Test a handled signal stops the ticker and is logged."""
        ticker = Ticker(mock_logger, secs=0.1)
        ticker._handle_signal(signal.SIGTERM, None)
        assert ticker.stopped() is True
        mock_logger.debug.assert_called_once_with("received SIGTERM, stopping ticker")
