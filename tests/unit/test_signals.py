# tests/unit/test_signals.py: Unit tests for the termination gateway.

import os
import signal
import threading

from qst.signals import SignalGateway
from qst.util.errors import WatchTargetGoneError


def test_signal_ends_wait_with_zero_exit():
    """Tests that a caught SIGTERM is reported as a clean shutdown."""
    gateway = SignalGateway()
    gateway.install()
    try:
        os.kill(os.getpid(), signal.SIGTERM)
        shutdown = gateway.wait(timeout=2)
    finally:
        gateway.restore()

    assert shutdown.signum == signal.SIGTERM
    assert shutdown.exit_code == 0
    assert shutdown.describe() == "SIGTERM"

def test_restore_reinstates_previous_handlers():
    """Tests that restore() puts the original handlers back."""
    previous = signal.getsignal(signal.SIGINT)
    gateway = SignalGateway()
    gateway.install()
    assert signal.getsignal(signal.SIGINT) != previous
    gateway.restore()
    assert signal.getsignal(signal.SIGINT) == previous

def test_fatal_report_from_other_thread():
    """Tests that a fatal error reported by a worker thread ends the wait."""
    gateway = SignalGateway()
    error = WatchTargetGoneError("'x' disappeared, exiting.")
    threading.Thread(target=gateway.report_fatal, args=(error,)).start()

    shutdown = gateway.wait(timeout=2)

    assert shutdown.error is error
    assert shutdown.exit_code == 3

def test_only_first_cause_is_returned():
    """Tests that wait() is one-shot and hands back the first cause only."""
    gateway = SignalGateway()
    gateway.report_fatal(WatchTargetGoneError("first"))
    gateway.report_fatal(WatchTargetGoneError("second"))

    assert str(gateway.wait(timeout=1).error) == "first"

def test_wait_times_out():
    """Tests that wait() returns None when nothing arrives."""
    assert SignalGateway().wait(timeout=0.05) is None
