from unittest import mock

import pytest

from hogbom.stopwatch import Stopwatch, StopwatchError


def test_stop_without_start_raises():
    sw = Stopwatch()
    with pytest.raises(StopwatchError, match="Start time not set"):
        sw.stop()


def test_stopwatch_error_is_runtime_error():
    with pytest.raises(RuntimeError):
        Stopwatch().stop()


def test_elapsed_uses_clock_difference():
    with mock.patch("time.monotonic", side_effect=[10.0, 12.5]):
        sw = Stopwatch()
        sw.start()
        assert sw.stop() == pytest.approx(2.5)


def test_elapsed_is_non_negative():
    sw = Stopwatch()
    sw.start()
    assert sw.stop() >= 0.0


def test_context_manager_records_elapsed():
    with mock.patch("time.monotonic", side_effect=[1.0, 4.0]):
        with Stopwatch() as sw:
            pass
    assert sw.elapsed == pytest.approx(3.0)