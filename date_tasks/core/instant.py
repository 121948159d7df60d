from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from typing import NamedTuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from date_tasks.utils.errors import UserInputError
# date_tasks/core/instant.py

UTC = timezone.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
ONE_MS = timedelta(milliseconds=1)

# "local" calendar terms resolve against this zone, never the host's
_local_tz: tzinfo = UTC


def resolve_timezone(tz: Union[str, tzinfo, None]) -> tzinfo:
    """IANA name or tzinfo; None means the configured local timezone."""
    if tz is None:
        return _local_tz
    if isinstance(tz, str):
        try:
            return ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise UserInputError(f"unknown timezone: {tz!r}") from e
    return tz


def set_local_timezone(tz: Union[str, tzinfo]) -> tzinfo:
    global _local_tz
    _local_tz = resolve_timezone(tz)
    return _local_tz


def get_local_timezone() -> tzinfo:
    return _local_tz


class DateFields(NamedTuple):
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int


@dataclass(frozen=True, order=True)
class Instant:
    """
    A point in time, millisecond resolution.

    - Stored as signed milliseconds since 1970-01-01T00:00:00Z
    - ``Instant - Instant`` gives a signed ``timedelta``
    - ``Instant ± timedelta`` gives an ``Instant`` (rounded down to whole ms)
    """
    epoch_ms: int

    # ================================================================
    # constructors
    # ================================================================
    @classmethod
    def from_epoch_ms(cls, ms: int) -> Instant:
        return cls(int(ms))

    @classmethod
    def from_datetime(cls, value: datetime) -> Instant:
        """Naive datetimes are read in the local timezone."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=_local_tz)
        return cls((value - EPOCH) // ONE_MS)

    @classmethod
    def at(
        cls,
        tz: tzinfo,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> Instant:
        return cls.from_datetime(
            datetime(year, month, day, hour, minute, second, millisecond * 1000, tzinfo=tz)
        )

    @classmethod
    def utc(cls, year: int, *fields: int) -> Instant:
        """Instant.utc(2016, 4, 5, 3, 0) -- months are 1-based."""
        return cls.at(UTC, year, *fields)

    @classmethod
    def local(cls, year: int, *fields: int) -> Instant:
        return cls.at(_local_tz, year, *fields)

    # ================================================================
    # field extraction
    # ================================================================
    def to_datetime(self, tz: tzinfo = UTC) -> datetime:
        return (EPOCH + self.epoch_ms * ONE_MS).astimezone(tz)

    def fields(self, tz: tzinfo) -> DateFields:
        d = self.to_datetime(tz)
        return DateFields(
            d.year, d.month, d.day, d.hour, d.minute, d.second, d.microsecond // 1000
        )

    def utc_fields(self) -> DateFields:
        return self.fields(UTC)

    def local_fields(self) -> DateFields:
        return self.fields(_local_tz)

    def to_iso8601(self) -> str:
        f = self.utc_fields()
        return (
            f"{f.year:04d}-{f.month:02d}-{f.day:02d}"
            f"T{f.hour:02d}:{f.minute:02d}:{f.second:02d}.{f.millisecond:03d}Z"
        )

    # ================================================================
    # arithmetic
    # ================================================================
    def __sub__(self, other):
        if isinstance(other, Instant):
            return timedelta(milliseconds=self.epoch_ms - other.epoch_ms)
        if isinstance(other, timedelta):
            return Instant((self.epoch_ms * ONE_MS - other) // ONE_MS)
        return NotImplemented

    def __add__(self, other):
        if isinstance(other, timedelta):
            return Instant(self.epoch_ms + other // ONE_MS)
        return NotImplemented

    __radd__ = __add__

    def __str__(self) -> str:
        return self.to_iso8601()
