"""
Tests for the watch-and-restart loop.

The change watcher is replaced by a scripted mock so each test controls
exactly which poll reports a change; children are real processes.
"""

import os
import signal
import threading
from unittest.mock import Mock

import pytest

from runkit.watch import ChangeWatcher, PatternSet, State, WatchLoop, watch


def _scripted_watcher(loop_ref: list, changes: set[int], stop_after: int, seen: list):
    """Watcher mock reporting a change on the given poll numbers."""
    watcher = Mock(spec=ChangeWatcher)

    def check(patterns):
        loop = loop_ref[0]
        seen.append(loop.child)
        poll = len(seen)
        if poll >= stop_after:
            loop.stop()
            return False
        return poll in changes

    watcher.check_for_change.side_effect = check
    return watcher


@pytest.mark.integration
class TestWatchLoop:
    """Tests for WatchLoop.run()."""

    def test_restart_on_change(self, lg, log_output):
        """Test a change kills the old child's group and starts a new child."""
        loop_ref: list = []
        seen: list = []
        watcher = _scripted_watcher(loop_ref, changes={2}, stop_after=4, seen=seen)
        loop = WatchLoop(
            watcher, PatternSet(["*.go"]), "sleep", "30", interval=0.01, lg=lg, handle_signals=False
        )
        loop_ref.append(loop)

        loop.run()

        first, second = seen[0], seen[-1]
        assert first is not second
        assert loop.restarts == 1
        assert loop.state is State.RUNNING
        # Both children were terminated: the first on restart, the second on stop
        assert first.returncode == -signal.SIGTERM
        assert second.returncode == -signal.SIGTERM
        assert log_output.getvalue().count("CMD: sleep 30") == 2
        assert "change detected, restarting" in log_output.getvalue()

    def test_no_change_keeps_child(self, lg):
        """Test the child is left alone while nothing changes."""
        loop_ref: list = []
        seen: list = []
        watcher = _scripted_watcher(loop_ref, changes=set(), stop_after=5, seen=seen)
        loop = WatchLoop(
            watcher, PatternSet(["*.go"]), "sleep", "30", interval=0.01, lg=lg, handle_signals=False
        )
        loop_ref.append(loop)

        loop.run()

        assert loop.restarts == 0
        assert all(child is seen[0] for child in seen)
        watcher.check_for_change.assert_called_with(PatternSet(["*.go"]))

    def test_failed_start_is_retried_on_next_change(self, lg, log_output):
        """Test a child that cannot start does not end the loop."""
        loop_ref: list = []
        seen: list = []
        watcher = _scripted_watcher(loop_ref, changes={1, 2}, stop_after=3, seen=seen)
        loop = WatchLoop(
            watcher, PatternSet(["*"]), "runkit-no-such-program", interval=0.01, lg=lg,
            handle_signals=False,
        )
        loop_ref.append(loop)

        loop.run()

        assert loop.restarts == 2
        assert log_output.getvalue().count("could not start command") == 3

    def test_stop_from_other_thread(self, lg):
        """Test stop() ends the loop and terminates the child."""
        watcher = Mock(spec=ChangeWatcher)
        watcher.check_for_change.return_value = False
        loop = WatchLoop(watcher, PatternSet(["*.go"]), "sleep", "30", interval=0.01, lg=lg)

        threading.Timer(0.2, loop.stop).start()
        previous = signal.getsignal(signal.SIGTERM)
        loop.run()

        assert loop.child.returncode == -signal.SIGTERM
        assert signal.getsignal(signal.SIGTERM) == previous


@pytest.mark.integration
class TestWatchFunction:
    """Tests for the watch() convenience function."""

    def test_watch_until_sigint(self, temp_dir, lg, log_output):
        """Test watch() runs the program until the process is interrupted."""
        (temp_dir / "main.go").write_text("package main\n")
        threading.Timer(0.3, os.kill, args=(os.getpid(), signal.SIGINT)).start()

        watch(["*.go"], ["vendor/*"], "sleep", "30", interval=0.01, root=temp_dir, lg=lg)

        output = log_output.getvalue()
        assert "CMD: sleep 30" in output
        assert "received SIGINT" in output
