"""Tests for runner helper functions and progress monitors"""

import io
import signal
import threading
import time
from unittest.mock import patch

import pytest

from dbmaint.runner import ArgType, NullProgressMonitor, WriterProgressMonitor
from dbmaint.runner.helpers import cancel_on_interrupt, format_execution_time, timer, vprint


@pytest.fixture
def mock_args():
    return ArgType(verbosity=1, log_rather_than_print=False)


# ==================== vprint() Tests ====================


@pytest.mark.unit
def test_vprint_prints_to_stderr(mock_args):
    # PRINTKWARGS binds sys.stderr at import time, so capsys cannot see it
    stream = io.StringIO()
    with patch.dict("dbmaint.runner.helpers.PRINTKWARGS", file=stream):
        vprint(mock_args, "Test message", "with args")
    assert stream.getvalue() == "Test message with args\n"


@pytest.mark.unit
def test_vprint_with_verbosity_disabled(mock_args, capsys):
    mock_args.verbosity = 0
    vprint(mock_args, "This should not appear")

    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""


@pytest.mark.unit
def test_vprint_with_logging_enabled(mock_args, caplog, capsys):
    mock_args.log_rather_than_print = True
    with caplog.at_level("INFO", logger="dbmaint.runner.helpers"):
        vprint(mock_args, "Log message", 42)
    assert "Log message 42" in caplog.text
    assert capsys.readouterr().err == ""


# ==================== timer() Tests ====================


@pytest.mark.unit
def test_timer_yields_elapsed_time():
    t = timer()
    first = next(t)
    assert first >= 0
    time.sleep(0.01)
    assert next(t) >= 0.01


# ==================== format_execution_time() Tests ====================


@pytest.mark.unit
@pytest.mark.parametrize(
    "millis, expected",
    [(0, "0ms"), (999, "999ms"), (1500, "1.50s"), (61_000, "1m 1s"), (3_600_000, "60m 0s")],
)
def test_format_execution_time(millis, expected):
    assert format_execution_time(millis) == expected


# ==================== Progress Monitors ====================


@pytest.mark.unit
def test_null_monitor_tracks_progress():
    monitor = NullProgressMonitor()
    monitor.begin_task("Execute tool 'x'", 2)
    monitor.sub_task("Process [t]")
    monitor.worked(3)
    monitor.done()

    assert (monitor.label, monitor.sub_label, monitor.total, monitor.units) == ("Execute tool 'x'", "Process [t]", 2, 3)
    assert monitor.finished
    assert not monitor.is_cancelled()
    monitor.cancel()
    assert monitor.is_cancelled()


@pytest.mark.unit
def test_writer_monitor_echoes_labels():
    stream = io.StringIO()
    monitor = WriterProgressMonitor(stream)
    monitor.begin_task("Execute tool 'x'", 1)
    monitor.sub_task("Process [t]")
    assert stream.getvalue() == "Execute tool 'x'\nProcess [t]\n"


# ==================== cancel_on_interrupt() Tests ====================


@pytest.mark.unit
def test_cancel_on_interrupt_requests_cancellation():
    monitor = NullProgressMonitor()
    previous = signal.getsignal(signal.SIGINT)
    with cancel_on_interrupt(monitor):
        handler = signal.getsignal(signal.SIGINT)
        handler(signal.SIGINT, None)
    assert monitor.is_cancelled()
    assert signal.getsignal(signal.SIGINT) is previous


@pytest.mark.unit
def test_cancel_on_interrupt_outside_main_thread():
    """Test the helper is a no-op off the main thread"""
    monitor = NullProgressMonitor()
    outcome = []

    def worker():
        with cancel_on_interrupt(monitor) as m:
            outcome.append(m)

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()
    assert outcome == [monitor]
