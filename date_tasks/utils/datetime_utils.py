#!filepath: date_tasks/utils/datetime_utils.py
from __future__ import annotations
import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import NoReturn, Optional, Union

from date_tasks.core.instant import (
    Instant,
    UTC,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    ONE_MS,
    get_local_timezone,
    resolve_timezone,
    set_local_timezone,
)
from date_tasks.utils.errors import ParseError
from date_tasks.utils.logger import logs

InstantLike = Union[Instant, datetime]
TzLike = Union[str, tzinfo, None]

# ================================================================
# RFC 2822 grammar (fixed English tables, no locale)
# ================================================================
_ZONE = r"[+-]\d{4}|[A-Za-z]{1,3}(?:\s*[+-]\d{1,2}(?::?\d{2})?)?"

_RFC2822_RE = re.compile(
    rf"""^\s*
    (?:(?P<dow>[A-Za-z]{{3}})\s*,?\s*)?
    (?P<day>\d{{1,2}})\s+
    (?P<month>[A-Za-z]{{3}})\s+
    (?P<year>\d{{2,4}})\s+
    (?P<hour>\d{{2}}):(?P<minute>\d{{2}})(?::(?P<second>\d{{2}}))?
    (?:\s*(?P<zone>{_ZONE}))?
    \s*$""",
    re.VERBOSE | re.ASCII,
)

# "December 17, 1995 03:24:00"
_LONG_MONTH_RE = re.compile(
    rf"""^\s*
    (?P<month>[A-Za-z]+)\s+
    (?P<day>\d{{1,2}}),?\s+
    (?P<year>\d{{4}})
    (?:\s+(?P<hour>\d{{1,2}}):(?P<minute>\d{{2}})(?::(?P<second>\d{{2}}))?)?
    (?:\s*(?P<zone>{_ZONE}))?
    \s*$""",
    re.VERBOSE | re.ASCII,
)

_ZONE_NAME_RE = re.compile(
    r"^(?P<name>[A-Za-z]+)(?:\s*(?P<sign>[+-])(?P<hh>\d{1,2})(?::?(?P<mm>\d{2}))?)?$",
    re.ASCII,
)

# RFC 2822 comments, innermost first
_COMMENT_RE = re.compile(r"\([^()]*\)")

# ================================================================
# ISO 8601 grammar
# ================================================================
_ISO_OFFSET = r"(?P<offset>Z|[+-]\d{2}(?::?\d{2})?)?"

_ISO_EXTENDED_RE = re.compile(
    r"^(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2})"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?"
    + _ISO_OFFSET + r")?)?)?$",
    re.ASCII,
)

_ISO_BASIC_RE = re.compile(
    r"^(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2})(?P<minute>\d{2})"
    r"(?:(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?"
    + _ISO_OFFSET + r")?$",
    re.ASCII,
)


class DateTimeUtils:
    MONTHS = {
        "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
        "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
    }
    MONTH_NAMES = {
        "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
        "july": 7, "august": 8, "september": 9, "october": 10, "november": 11,
        "december": 12,
    }
    WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

    # RFC 2822 section 4.3 zone names, offsets in minutes
    ZONES = {
        "UT": 0, "UTC": 0, "GMT": 0,
        "EST": -300, "EDT": -240,
        "CST": -360, "CDT": -300,
        "MST": -420, "MDT": -360,
        "PST": -480, "PDT": -420,
    }
    # military zones are treated as -0000 (no "J")
    ZONES.update({c: 0 for c in "ABCDEFGHIKLMNOPQRSTUVWXYZ"})

    # ---------------------------------------------------------------
    # local timezone
    # ---------------------------------------------------------------
    @classmethod
    def set_local_timezone(cls, tz: Union[str, tzinfo]) -> tzinfo:
        return set_local_timezone(tz)

    @classmethod
    def local_timezone(cls) -> tzinfo:
        return get_local_timezone()

    @classmethod
    def to_instant(cls, value: InstantLike) -> Instant:
        if isinstance(value, Instant):
            return value
        if isinstance(value, datetime):
            return Instant.from_datetime(value)
        raise TypeError(f"unsupported date type: {type(value)}")

    # ================================================================
    # RFC 2822
    # ================================================================
    @classmethod
    def parse_from_rfc2822(cls, text: str, tz: TzLike = None) -> Instant:
        """
        Accepted:
            "Tue, 26 Jan 2016 13:48:02 GMT"
            "26 Jan 2016 13:48 +0100"
            "Sun, 17 May 1998 03:00:00 GMT+01"
            "December 17, 1995 03:24:00"       (local time)
            "Tue, 26 Jan 2016 13:48:02 +0000 (UTC)"

        Comments are dropped. Missing zone -> ``tz``, default the local timezone.
        """
        fmt = "RFC 2822"
        cls._check_text(text, fmt)

        s = cls._strip_comments(text)
        m = _RFC2822_RE.match(s)
        if m:
            dow = m.group("dow")
            if dow and dow.lower() not in cls.WEEKDAYS:
                cls._fail(text, fmt, f"unknown day of week {dow!r}")
            month = cls.MONTHS.get(m.group("month").lower())
            year = cls._rfc_year(m.group("year"))
        else:
            m = _LONG_MONTH_RE.match(s)
            if not m:
                cls._fail(text, fmt)
            name = m.group("month").lower()
            month = cls.MONTH_NAMES.get(name) or cls.MONTHS.get(name)
            year = int(m.group("year"))

        if month is None:
            cls._fail(text, fmt, f"unknown month {m.group('month')!r}")

        zone = cls._rfc_zone(m.group("zone"), tz, text, fmt)
        second = int(m.group("second") or 0)

        return cls._build(
            text,
            fmt,
            zone,
            year,
            month,
            int(m.group("day")),
            int(m.group("hour") or 0),
            int(m.group("minute") or 0),
            min(second, 59),  # leap second
            0,
        )

    @classmethod
    def _strip_comments(cls, text: str) -> str:
        s, n = _COMMENT_RE.subn(" ", text)
        while n:
            s, n = _COMMENT_RE.subn(" ", s)
        return " ".join(s.split())

    @classmethod
    def _rfc_year(cls, s: str) -> int:
        # obsolete year forms: RFC 2822 section 4.3
        year = int(s)
        if len(s) == 2:
            return year + (2000 if year < 50 else 1900)
        if len(s) == 3:
            return year + 1900
        return year

    @classmethod
    def _rfc_zone(cls, zone: Optional[str], tz: TzLike, text: str, fmt: str) -> tzinfo:
        if zone is None:
            return resolve_timezone(tz)

        if zone[0] in "+-":
            hh, mm = int(zone[1:3]), int(zone[3:5])
            if hh > 23 or mm > 59:
                cls._fail(text, fmt, f"bad zone offset {zone!r}")
            minutes = hh * 60 + mm
            return timezone(timedelta(minutes=-minutes if zone[0] == "-" else minutes))

        m = _ZONE_NAME_RE.match(zone)
        name = m.group("name").upper() if m else None
        if name not in cls.ZONES:
            cls._fail(text, fmt, f"unknown zone {zone!r}")

        minutes = cls.ZONES[name]
        if m.group("sign"):
            hh, mm = int(m.group("hh")), int(m.group("mm") or 0)
            if hh > 23 or mm > 59:
                cls._fail(text, fmt, f"bad zone offset {zone!r}")
            shift = hh * 60 + mm
            minutes += -shift if m.group("sign") == "-" else shift

        if abs(minutes) >= 24 * 60:
            cls._fail(text, fmt, f"bad zone offset {zone!r}")
        return timezone(timedelta(minutes=minutes))

    # ================================================================
    # ISO 8601
    # ================================================================
    @classmethod
    def parse_from_iso8601(cls, text: str, tz: TzLike = None) -> Instant:
        """
        "2016-01-19T08:07:37Z", "2016-01-19T16:07:37+00:00", "20160119T080737Z", "2016-01"

        Date-only -> UTC midnight of the first day given; date-time without
        offset -> ``tz``, default the local timezone.
        Fractional seconds are truncated to milliseconds.
        """
        fmt = "ISO 8601"
        cls._check_text(text, fmt)

        s = text.strip()
        m = _ISO_EXTENDED_RE.match(s) or _ISO_BASIC_RE.match(s)
        if not m:
            cls._fail(text, fmt)

        if m.group("hour") is None:
            zone = UTC
        else:
            zone = cls._iso_offset(m.group("offset"), tz, text, fmt)

        hour = int(m.group("hour") or 0)
        minute = int(m.group("minute") or 0)
        second = int(m.group("second") or 0)
        fraction = m.group("fraction") or ""
        millisecond = int((fraction + "000")[:3])

        # 24:00:00 is the end of the day
        end_of_day = hour == 24
        if end_of_day:
            if minute or second or int(fraction or 0):
                cls._fail(text, fmt, "hour 24 only allowed as 24:00:00")
            hour = 0

        instant = cls._build(
            text,
            fmt,
            zone,
            int(m.group("year")),
            int(m.group("month") or 1),
            int(m.group("day") or 1),
            hour,
            minute,
            second,
            millisecond,
        )
        return instant + timedelta(days=1) if end_of_day else instant

    @classmethod
    def _iso_offset(cls, offset: Optional[str], tz: TzLike, text: str, fmt: str) -> tzinfo:
        if offset is None:
            return resolve_timezone(tz)
        if offset == "Z":
            return UTC

        digits = offset[1:].replace(":", "")
        hh = int(digits[:2])
        mm = int(digits[2:4] or 0)
        if hh > 23 or mm > 59:
            cls._fail(text, fmt, f"bad offset {offset!r}")
        minutes = hh * 60 + mm
        return timezone(timedelta(minutes=-minutes if offset[0] == "-" else minutes))

    # ---------------------------------------------------------------
    # parse helpers
    # ---------------------------------------------------------------
    @classmethod
    def _check_text(cls, text, fmt: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"{fmt} input must be str, got {type(text)}")

    @classmethod
    def _fail(cls, text: str, fmt: str, reason: Optional[str] = None) -> NoReturn:
        logs.debug(f"[DateTimeUtils] {fmt} parse failed: {text!r} ({reason or 'no match'})")
        raise ParseError(text, fmt, reason)

    @classmethod
    def _build(
        cls,
        text: str,
        fmt: str,
        tz: tzinfo,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        millisecond: int,
    ) -> Instant:
        try:
            return Instant.at(tz, year, month, day, hour, minute, second, millisecond)
        except (ValueError, OverflowError) as e:
            cls._fail(text, fmt, str(e))

    # ================================================================
    # leap year
    # ================================================================
    @staticmethod
    def leap_year_rule(year: int) -> bool:
        return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0

    @classmethod
    def is_leap_year(cls, value: InstantLike, tz: TzLike = None) -> bool:
        """Gregorian rule applied to the calendar year in ``tz`` (default: local)."""
        year = cls.to_instant(value).fields(resolve_timezone(tz)).year
        return cls.leap_year_rule(year)

    # ================================================================
    # time span "HH:mm:ss.sss"
    # ================================================================
    @classmethod
    def format_time_span(cls, start: InstantLike, end: InstantLike) -> str:
        """
        ``end - start`` as HH:mm:ss.sss. Hours do not roll over into days.
        A negative span is formatted by its absolute value.
        """
        span_ms = (cls.to_instant(end) - cls.to_instant(start)) // ONE_MS
        if span_ms < 0:
            logs.debug(f"[DateTimeUtils] negative time span {span_ms}ms, formatting absolute value")

        hours, rest = divmod(abs(span_ms), MS_PER_HOUR)
        minutes, rest = divmod(rest, MS_PER_MINUTE)
        seconds, millis = divmod(rest, MS_PER_SECOND)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"

    # ================================================================
    # clock hands (UTC)
    # ================================================================
    @classmethod
    def clock_hand_angle_degrees(cls, value: InstantLike) -> float:
        f = cls.to_instant(value).utc_fields()
        minute_angle = f.minute * 6
        hour_angle = (f.hour % 12) * 30 + f.minute * 0.5
        raw = abs(hour_angle - minute_angle)
        return min(raw, 360 - raw)

    @classmethod
    def clock_hand_angle(cls, value: InstantLike) -> float:
        """Smaller angle between the hands, radians in [0, pi]."""
        # convert once, at the end
        return math.radians(cls.clock_hand_angle_degrees(value))


parse_from_rfc2822 = DateTimeUtils.parse_from_rfc2822
parse_from_iso8601 = DateTimeUtils.parse_from_iso8601
is_leap_year = DateTimeUtils.is_leap_year
format_time_span = DateTimeUtils.format_time_span
clock_hand_angle = DateTimeUtils.clock_hand_angle
clock_hand_angle_degrees = DateTimeUtils.clock_hand_angle_degrees
leap_year_rule = DateTimeUtils.leap_year_rule
