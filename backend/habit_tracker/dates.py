"""Day boundaries and weekday indices.

Everything is computed in UTC. A day boundary is a naive ``datetime`` at
midnight of the UTC calendar date, which is how dates are stored in the
``days`` and ``habits`` tables.
"""
from datetime import date, datetime, time, timezone
from typing import Optional, Union

from .errors import ValidationError

DateLike = Union[date, datetime]

SUNDAY = 0
SATURDAY = 6


def day_boundary(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return datetime.combine(value.date(), time.min)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def weekday_of(value: DateLike) -> int:
    """Weekday index of ``value``, Sunday=0 .. Saturday=6."""
    # isoweekday: Monday=1 .. Sunday=7
    return day_boundary(value).isoweekday() % 7


def today(now: Optional[datetime] = None) -> datetime:
    return day_boundary(now or datetime.now(timezone.utc))


def parse_date(raw: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into a day boundary."""
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {raw!r}")
    return day_boundary(parsed)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a stored naive day boundary for serialization."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
