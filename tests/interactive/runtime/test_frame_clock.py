import time

import pytest

from glyphfield.interactive.runtime.frame_clock import RealTimeClock


def test_real_time_clock_returns_elapsed_seconds():
    start_time = time.perf_counter() - 1.0
    clock = RealTimeClock(start_time=start_time)
    assert 0.5 < clock.t() < 1.5


def test_real_time_clock_millis_matches_seconds():
    start_time = time.perf_counter() - 2.0
    clock = RealTimeClock(start_time=start_time)
    ms = clock.millis()
    assert 1500.0 < ms < 2500.0
    assert clock.t() * 1000.0 == pytest.approx(ms, abs=250.0)


def test_real_time_clock_is_monotonic():
    clock = RealTimeClock(start_time=time.perf_counter())
    a = clock.millis()
    b = clock.millis()
    assert b >= a
