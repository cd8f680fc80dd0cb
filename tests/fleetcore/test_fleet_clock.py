"""
Tests for fleetcore.time — injectable clocks.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from fleetcore.time import SYSTEM_CLOCK, FixedClock, SystemClock, now_utc

FIXED_TIME = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)


def test_system_clock_is_utc():
    assert SystemClock().now_utc().tzinfo == timezone.utc


def test_fixed_clock_is_stable():
    clock = FixedClock(FIXED_TIME)
    assert clock.now_utc() == FIXED_TIME
    assert clock.now_utc() == FIXED_TIME


def test_fixed_clock_rejects_naive_datetime():
    with pytest.raises(ValueError, match="timezone-aware"):
        FixedClock(datetime(2026, 1, 1))


def test_fixed_clock_rejects_plain_date():
    with pytest.raises(TypeError):
        FixedClock(date(2026, 1, 1))


def test_fixed_clock_normalises_to_utc():
    local = datetime(2026, 3, 10, 1, 0, tzinfo=timezone(timedelta(hours=-5)))
    clock = FixedClock(local)
    assert clock.now_utc().tzinfo == timezone.utc
    assert clock.now_utc() == datetime(2026, 3, 10, 6, 0, tzinfo=timezone.utc)
    assert clock.today_utc() == date(2026, 3, 10)


def test_fixed_clock_advance():
    clock = FixedClock(FIXED_TIME)
    clock.advance(days=1, hours=2)
    assert clock.now_utc() == FIXED_TIME + timedelta(days=1, hours=2)


def test_now_utc_reads_given_clock():
    assert now_utc(FixedClock(FIXED_TIME)) == FIXED_TIME


def test_now_utc_defaults_to_system_clock():
    assert isinstance(SYSTEM_CLOCK, SystemClock)
    assert now_utc().tzinfo == timezone.utc
