from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal

from ..core.constants import WEEK_LENGTH_DAYS
from ..core.exceptions import ValidationError

_SECONDS_PER_HOUR = Decimal(3600)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_week_start(value: str | None) -> date:
    v = (value or "").strip()
    if not v:
        raise ValidationError("weekStart is required")
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError("weekStart must be YYYY-MM-DD")


def parse_clock_time(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def week_start_for(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_end_for(week_start: date) -> date:
    return week_start + timedelta(days=WEEK_LENGTH_DAYS - 1)


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Signed duration in decimal hours (no rounding)."""
    delta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds)
    if delta.microseconds:
        seconds += Decimal(delta.microseconds) / Decimal(1_000_000)
    return seconds / _SECONDS_PER_HOUR


def at_time_of_day(moment: datetime, clock: time) -> datetime:
    """Same calendar day as ``moment`` with the time of day replaced."""
    return moment.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)
