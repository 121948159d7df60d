#!filepath: tests/base_test/test_instant.py
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from date_tasks import Instant, UserInputError
from date_tasks.core import DateFields, UTC, get_local_timezone, set_local_timezone

SH_TZ = ZoneInfo("Asia/Shanghai")


# ================================================================
# construction
# ================================================================
def test_epoch():
    assert Instant.from_epoch_ms(0) == Instant.utc(1970)
    assert Instant.utc(1970).to_iso8601() == "1970-01-01T00:00:00.000Z"


def test_before_epoch_is_negative():
    assert Instant.utc(1969, 12, 31, 23, 59, 59, 999).epoch_ms == -1


def test_utc_fields():
    i = Instant.utc(2016, 4, 5, 21, 7, 9, 42)
    assert i.utc_fields() == DateFields(2016, 4, 5, 21, 7, 9, 42)
    assert i.utc_fields().millisecond == 42


def test_local_fields_follow_local_timezone():
    i = Instant.utc(2025, 1, 3, 1, 30)
    assert i.local_fields().day == 3

    set_local_timezone("Asia/Shanghai")
    assert get_local_timezone() == SH_TZ
    assert i.local_fields() == DateFields(2025, 1, 3, 9, 30, 0, 0)
    assert Instant.local(2025, 1, 3, 9, 30) == i


def test_from_datetime_naive_is_local():
    set_local_timezone(SH_TZ)
    assert Instant.from_datetime(datetime(2025, 1, 3, 9, 30)) == Instant.utc(2025, 1, 3, 1, 30)


def test_from_datetime_aware():
    d = datetime(2025, 1, 3, 9, 30, 0, 123999, tzinfo=timezone(timedelta(hours=-2)))
    assert Instant.from_datetime(d) == Instant.utc(2025, 1, 3, 11, 30, 0, 123)


def test_to_datetime():
    i = Instant.utc(2025, 1, 3, 1, 30, 0, 5)
    assert i.to_datetime() == datetime(2025, 1, 3, 1, 30, 0, 5000, tzinfo=UTC)
    assert i.to_datetime(SH_TZ).hour == 9


def test_unknown_timezone():
    with pytest.raises(UserInputError):
        set_local_timezone("Mars/Olympus_Mons")


# ================================================================
# arithmetic
# ================================================================
def test_subtraction_gives_signed_timedelta():
    a = Instant.utc(2000, 2, 1, 10)
    b = Instant.utc(2000, 2, 1, 15, 20, 10, 453)

    assert b - a == timedelta(hours=5, minutes=20, seconds=10, milliseconds=453)
    assert a - b == -timedelta(hours=5, minutes=20, seconds=10, milliseconds=453)


def test_add_and_subtract_timedelta():
    a = Instant.utc(2000, 2, 1, 10)

    assert a + timedelta(minutes=30) == Instant.utc(2000, 2, 1, 10, 30)
    assert timedelta(minutes=30) + a == Instant.utc(2000, 2, 1, 10, 30)
    assert a - timedelta(days=1) == Instant.utc(2000, 1, 31, 10)
    # sub-millisecond parts are rounded down
    assert (a + timedelta(microseconds=1500)).epoch_ms == a.epoch_ms + 1
    assert (a - timedelta(microseconds=500)).epoch_ms == a.epoch_ms - 1


def test_unsupported_operands():
    with pytest.raises(TypeError):
        Instant.utc(2000) + 5
    with pytest.raises(TypeError):
        Instant.utc(2000) - "x"


def test_ordering_and_hashing():
    a, b = Instant.utc(2000), Instant.utc(2001)
    assert a < b
    assert sorted([b, a]) == [a, b]
    assert len({a, Instant.utc(2000), b}) == 2


def test_immutable():
    i = Instant.utc(2000)
    with pytest.raises(AttributeError):
        i.epoch_ms = 0


def test_str_is_iso8601():
    assert str(Instant.utc(2016, 1, 19, 8, 7, 37, 5)) == "2016-01-19T08:07:37.005Z"
