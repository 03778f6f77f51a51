"""
Date and time helpers.

Stored instants are timezone-aware UTC datetimes. Practice calendar
computations ("today", the practice week) use UTC day boundaries. The studio
timezone is applied to lesson wall-clock input, to lesson week windows and
when rendering times back to people.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from studio.core.exceptions import ValidationError


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Current calendar date at UTC day boundaries."""
    return utc_now().date()


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown timezone: {name}") from e


def local_today(zone_name: str) -> date:
    """Current calendar date in zone_name."""
    return utc_now().astimezone(get_zone(zone_name)).date()


def week_bounds(reference: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing reference."""
    monday = reference - timedelta(days=reference.weekday())
    return monday, monday + timedelta(days=6)


def to_calendar_date(value: Union[date, datetime, str]) -> date:
    """
    Normalize a practice date to a calendar date.

    Accepts a date, a datetime (its date part is used) or an ISO string
    such as '2024-03-01' or '2024-03-01T18:30:00Z'. The whole string must
    parse; the date written in it is kept as-is, without zone conversion.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Date must not be empty")
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            if len(text) < 10 or text[10] not in "Tt ":
                raise ValueError("missing date/time separator")
            # fromisoformat only accepts a trailing 'Z' from Python 3.11
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text).date()
        except ValueError as e:
            raise ValidationError(f"Invalid date string: {value}") from e
    raise ValidationError(f"Unsupported date value: {value!r}")


def as_utc(moment: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken as UTC."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def optional_utc(moment: Optional[datetime]) -> Optional[datetime]:
    return as_utc(moment) if moment is not None else None


def wall_clock_to_utc(day: date, start: time, zone_name: str) -> datetime:
    """Interpret a wall-clock date/time in zone_name and return aware UTC."""
    local = datetime.combine(day, start.replace(tzinfo=None)).replace(tzinfo=get_zone(zone_name))
    return local.astimezone(timezone.utc)


def utc_to_wall_clock(moment: datetime, zone_name: str) -> datetime:
    """Render a stored UTC datetime in zone_name."""
    return as_utc(moment).astimezone(get_zone(zone_name))
