"""Conversion between absolute instants and Mountain Time civil strings."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from typing import Any, NamedTuple
from zoneinfo import ZoneInfo

TARGET_TZ = ZoneInfo("America/Denver")

_TIME_OF_DAY = re.compile(
    r"^\s*(?:(?P<packed>\d{3,4})|(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?::\d{2})?)"
    r"\s*(?P<meridiem>[ap]\.?m\.?)?",
    re.IGNORECASE,
)


class InvalidInputError(ValueError):
    pass


class LocalDateTime(NamedTuple):
    date: str
    time: str


def parse_instant(value: Any, naive_tz: tzinfo = TARGET_TZ) -> datetime | None:
    """Parse a provider timestamp into an aware datetime.

    Values without an offset are read as wall-clock time in ``naive_tz``.
    Returns None for anything that is not a recognizable point in time.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        if cleaned[-1] in "zZ":
            cleaned = cleaned[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(cleaned)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=naive_tz)
    return parsed


def overlay_time_of_day(
    instant: datetime, raw_time: Any, naive_tz: tzinfo = TARGET_TZ
) -> datetime:
    """Replace hours/minutes of ``instant`` on the ``naive_tz`` wall clock.

    Accepts "19:00", "19:00:00", "7:00 pm" and packed "1900". Unreadable
    values leave the instant untouched.
    """
    match = _TIME_OF_DAY.match(str(raw_time))
    if not match:
        return instant

    packed = match.group("packed")
    if packed:
        hour, minute = int(packed[:-2]), int(packed[-2:])
    else:
        hour = int(match.group("hour"))
        minute = int(match.group("minute") or 0)

    meridiem = (match.group("meridiem") or "").lower()
    if meridiem.startswith("p") and hour < 12:
        hour += 12
    elif meridiem.startswith("a") and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        return instant
    try:
        local = instant.astimezone(naive_tz)
    except OverflowError:
        return instant
    return local.replace(hour=hour, minute=minute, second=0, microsecond=0)


def to_local_time(instant: datetime | str, tz: tzinfo = TARGET_TZ) -> LocalDateTime:
    """Return the civil date/time of an absolute instant in ``tz``."""
    if isinstance(instant, str):
        parsed = parse_instant(instant, naive_tz=timezone.utc)
        if parsed is None:
            raise InvalidInputError(f"Invalid date provided: {instant!r}")
        instant = parsed
    if not isinstance(instant, datetime):
        raise InvalidInputError(f"Invalid date provided: {instant!r}")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise InvalidInputError("Naive datetimes are not absolute instants")

    try:
        local = instant.astimezone(tz)
    except (OverflowError, ValueError) as exc:
        raise InvalidInputError(f"Date out of range: {instant!r}") from exc
    return LocalDateTime(date=local.strftime("%Y-%m-%d"), time=local.strftime("%H:%M"))


def local_to_instant(date_value: str, time_value: str, tz: tzinfo = TARGET_TZ) -> datetime:
    naive = datetime.strptime(f"{date_value} {time_value}", "%Y-%m-%d %H:%M")
    return naive.replace(tzinfo=tz)
