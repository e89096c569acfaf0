"""Local time-of-day and calendar-date primitives.

Every calendar date in the system is a naive ``datetime`` pinned to local
noon. Reformatting a noon-anchored value through any time zone within +/-12h
keeps the same calendar day, so nothing downstream drifts by one day.

Times of day are plain floats of hours (``20.5`` is 8:30 PM). Values outside
``[0, 24)`` are legal intermediate results of time-zone shifts; ``carry_day``
is the one place that folds them back into a day carry plus an in-day hour.
"""

import calendar
import math
import re
from datetime import date, datetime

from dateutil import parser as date_parser

NOON = 12

_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?([a-z]*)$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")
_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?$")
_WORD_RE = re.compile(r"[a-z]+")
_MONTH_ABBRS = {abbr.lower() for abbr in calendar.month_abbr if abbr}

_AM = ("a", "am")
_PM = ("p", "pm")


def parse_local_time_of_day(text: str | None) -> float | None:
    """Parse a flexible local time-of-day string into hours.

    Accepts ``"9a"``, ``"9:30a"``, ``"9:30 PM"``, ``"14:05"``. A 12-hour style
    value with a missing or unrecognized meridiem is read as PM; hours above
    12 (or 0) without a meridiem are read as 24-hour clock.

    Returns:
        Hours as a float in ``[0, 24)``, or None when the text is unparseable.
        None means "unknown" and must never be treated as midnight.
    """
    if text is None:
        return None

    t = str(text).strip().lower().replace(" ", "").replace(".", "")
    match = _TIME_RE.match(t)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2) or 0)
    suffix = match.group(3)

    if minutes >= 60 or hours > 23:
        return None

    if 1 <= hours <= 12:
        if suffix in _AM:
            if hours == 12:
                hours = 0
        elif hours < 12:
            # "p", "pm", missing or unrecognized meridiem
            hours += 12

    return hours + minutes / 60


def carry_day(hours: float) -> tuple[int, float]:
    """Split an hour value into (day carry, hours within that day).

    ``carry_day(-1)`` is ``(-1, 23.0)``; ``carry_day(25.5)`` is ``(1, 1.5)``.
    """
    carry = math.floor(hours / 24)
    return carry, hours - carry * 24


def format_hours_of_day(hours: float) -> str:
    """Format hours as a compact 12-hour clock label, e.g. ``20.5 -> "8:30p"``.

    Out-of-range values wrap modulo 24; the day carry is dropped and callers
    track it separately via ``carry_day``.
    """
    _, in_day = carry_day(hours)
    h = math.floor(in_day)
    m = round((in_day - h) * 60)
    if m == 60:
        h, m = h + 1, 0
    h %= 24

    meridiem = "a" if h < 12 else "p"
    display_hour = h % 12 or 12
    return f"{display_hour}:{m:02d}{meridiem}"


def canonical_date(value: date) -> datetime:
    """Anchor a calendar date at local noon."""
    return datetime(value.year, value.month, value.day, NOON, 0, 0)


def parse_local_calendar_date(
    text: str | date | None,
    reference_year: int | None = None,
) -> datetime | None:
    """Parse a flexible local calendar date into a noon-anchored datetime.

    Accepts ``yyyy-MM-dd`` (optionally followed by a time part, which is
    ignored), ``M/d/yy``, ``M/d/yyyy``, ``M/d`` and free-form forms naming a month, such as
    ``"Wed Apr 15"``. A missing year resolves to ``reference_year`` or the
    current year.

    Returns:
        ``datetime`` at 12:00:00 local, or None when unparseable.
    """
    if text is None:
        return None
    if isinstance(text, date):
        return canonical_date(text)

    s = str(text).strip()
    if not s:
        return None

    year_default = reference_year or datetime.now().year

    try:
        iso = _ISO_RE.match(s)
        if iso:
            return datetime(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)), NOON)

        slash = _SLASH_RE.match(s)
        if slash:
            year = int(slash.group(3)) if slash.group(3) else year_default
            if year < 100:
                year += 2000
            return datetime(year, int(slash.group(1)), int(slash.group(2)), NOON)

        # Free-form: "Wed Apr 15", "April 15, 2026", "15 Apr". A month name is
        # required so times and bare numbers are not read as dates.
        if not any(w[:3] in _MONTH_ABBRS for w in _WORD_RE.findall(s.lower())):
            return None
        parsed = date_parser.parse(s, default=datetime(year_default, 1, 1, NOON))
    except (ValueError, OverflowError):
        return None

    return canonical_date(parsed)


def format_date(value: datetime | date) -> str:
    """Format a calendar date as ISO ``yyyy-MM-dd``."""
    return value.strftime("%Y-%m-%d")


def day_offset(value: datetime | date, trip_start: datetime | date) -> int:
    """Whole calendar days from the trip's first day to ``value``."""
    a = value.date() if isinstance(value, datetime) else value
    b = trip_start.date() if isinstance(trip_start, datetime) else trip_start
    return (a - b).days


def day_label(value: datetime | date) -> str:
    """Uppercase short weekday, month and day, e.g. ``"WED APR 15"``."""
    return f"{value:%a} {value:%b} {value.day}".upper()
