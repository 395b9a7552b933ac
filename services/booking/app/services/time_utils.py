"""
Timezone helpers shared by availability, unavailability and the booking ledger.

Every function resolves zones through the same pytz database so weekday, local
date and UTC materialization always agree for a given zone name.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

import pytz

from app.core.enums import WEEKDAYS
from app.core.exceptions import ValidationException

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_timezone(tz_name: Optional[str]) -> pytz.BaseTzInfo:
    """Return the pytz zone for ``tz_name`` or raise ``ValidationException``."""
    if not tz_name:
        raise ValidationException("timeZone is required")
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError as exc:
        raise ValidationException(f"Unknown timeZone '{tz_name}'") from exc


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values read back from the database."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def current_instant_in_zone(tz_name: str, now: Optional[datetime] = None) -> datetime:
    """The current instant, as a UTC-aware datetime, after validating the zone."""
    get_timezone(tz_name)
    return as_utc(now or utc_now())


def local_now(tz_name: str, now: Optional[datetime] = None) -> datetime:
    """The current wall-clock time in ``tz_name``."""
    tz = get_timezone(tz_name)
    return as_utc(now or utc_now()).astimezone(tz)


def local_today(tz_name: str, now: Optional[datetime] = None) -> date:
    return local_now(tz_name, now).date()


def today_date_string(tz_name: str, now: Optional[datetime] = None) -> str:
    return local_today(tz_name, now).isoformat()


def weekday_of(value: Union[date, datetime], tz_name: str) -> str:
    """Weekday name of ``value`` as seen in ``tz_name``.

    A plain calendar date is already local to the venue and keeps its own
    weekday; an instant is converted into the zone first.
    """
    tz = get_timezone(tz_name)
    if isinstance(value, datetime):
        value = as_utc(value).astimezone(tz).date()
    return WEEKDAYS[value.weekday()]


def parse_hhmm(value: str) -> time:
    if not isinstance(value, str) or not _HHMM_PATTERN.match(value):
        raise ValidationException(f"Invalid time '{value}', expected HH:MM")
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def is_hhmm(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(_HHMM_PATTERN.match(value))


def minutes_of(value: str) -> int:
    parsed = parse_hhmm(value)
    return parsed.hour * 60 + parsed.minute


def format_hhmm(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def local_to_utc(day: date, hhmm: str, tz_name: str) -> datetime:
    """Materialize a venue-local wall time on ``day`` as a UTC instant.

    A wall time repeated when clocks fall back resolves to its first
    occurrence; one skipped when clocks spring forward is rejected.
    """
    tz = get_timezone(tz_name)
    naive = datetime.combine(day, parse_hhmm(hhmm))
    try:
        local = tz.localize(naive, is_dst=None)
    except pytz.exceptions.AmbiguousTimeError:
        local = tz.localize(naive, is_dst=True)
    except pytz.exceptions.NonExistentTimeError as exc:
        raise ValidationException(
            f"The time {hhmm} does not exist on {day.isoformat()} in {tz_name} "
            "due to Daylight Saving Time"
        ) from exc
    return local.astimezone(timezone.utc)


def local_interval_to_utc(day: date, start: str, end: str, tz_name: str) -> tuple[datetime, datetime]:
    """UTC bounds of ``[start, end)`` on ``day``; an end at or before start rolls to the next day."""
    start_utc = local_to_utc(day, start, tz_name)
    end_day = day if minutes_of(end) > minutes_of(start) else day + timedelta(days=1)
    return start_utc, local_to_utc(end_day, end, tz_name)


__all__ = [
    "as_utc",
    "current_instant_in_zone",
    "format_hhmm",
    "get_timezone",
    "is_hhmm",
    "local_interval_to_utc",
    "local_now",
    "local_to_utc",
    "local_today",
    "minutes_of",
    "parse_hhmm",
    "today_date_string",
    "utc_now",
    "weekday_of",
]
