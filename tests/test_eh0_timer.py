from datetime import timedelta

import pytest

from halmock.eh0.error import WouldBlock
from halmock.eh0.timer import MockClock


def test_count_down():
    clock = MockClock()
    timer = clock.get_timer()
    timer.start(100)
    clock.tick(50)
    with pytest.raises(WouldBlock):
        timer.wait()
    clock.tick(50)
    assert timer.wait() is None
    clock.tick(50)
    with pytest.raises(WouldBlock):
        timer.wait()
    clock.tick(50)
    assert timer.wait() is None


def test_elapsed_accumulates():
    clock = MockClock()
    assert clock.elapsed() == 0
    clock.tick(50)
    clock.tick(50)
    assert clock.elapsed() == 100
    assert clock.now() == clock.elapsed()


def test_tick_with_timedelta():
    clock = MockClock()
    clock.tick(timedelta(microseconds=1))
    assert clock.elapsed() == 1000


def test_not_started_blocks():
    clock = MockClock()
    timer = clock.get_timer()
    clock.tick(1000)
    with pytest.raises(WouldBlock):
        timer.wait()


def test_cancel_stops_timer():
    clock = MockClock()
    timer = clock.get_timer()
    timer.start(100)
    clock.tick(100)
    timer.cancel()
    with pytest.raises(WouldBlock):
        timer.wait()
    timer.start(10)
    clock.tick(10)
    assert timer.wait() is None


def test_wait_restarts_period_from_now():
    clock = MockClock()
    timer = clock.get_timer()
    timer.start(100)
    clock.tick(250)
    assert timer.wait() is None
    with pytest.raises(WouldBlock):
        timer.wait()
    clock.tick(100)
    assert timer.wait() is None


def test_negative_and_bad_durations():
    clock = MockClock()
    with pytest.raises(ValueError):
        clock.tick(-1)
    with pytest.raises(TypeError):
        clock.tick(1.5)
    with pytest.raises(ValueError):
        clock.get_timer().start(timedelta(seconds=-1))