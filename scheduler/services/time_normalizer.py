"""
Time normalization between the business timezone, UTC storage and the host display timezone.

Business hours are entered and checked on the business timezone's wall clock;
everything persisted is naive UTC (TIMESTAMP WITHOUT TIME ZONE); the host
timezone is only ever used to render times for display.
"""

from datetime import date, datetime, time, timedelta
from typing import NamedTuple

import pytz

from scheduler.core.config import settings
from scheduler.core.errors import InvalidInputError

BUSINESS_TZ = pytz.timezone(settings.business_timezone)
STORAGE_TZ = pytz.UTC

REPORT_FORMAT = "%Y-%m-%d %H:%M %Z"
DAY_FORMAT = "%Y-%m-%d"
LABEL_FORMAT = "%H:%M"


class TimeChoice(NamedTuple):
    business_time: time
    instant_utc: datetime
    label: str


def _as_aware_utc(instant: datetime) -> datetime:
    if instant is None:
        raise InvalidInputError("An instant is required")
    if instant.tzinfo is None:
        # Naive values follow the storage convention: naive UTC
        return STORAGE_TZ.localize(instant)
    return instant.astimezone(STORAGE_TZ)


def _parse_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid date: {value!r}") from e


def _parse_time(value: time | str) -> time:
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    try:
        return time.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid time: {value!r}") from e


def to_business_timezone(instant: datetime) -> datetime:
    """Wall-clock representation of ``instant`` in the business timezone."""
    return _as_aware_utc(instant).astimezone(BUSINESS_TZ)


def to_storage_instant(day: date | str | None, time_of_day: time | str | None) -> datetime:
    """
    Combine a business-timezone date and time-of-day into an aware UTC instant.

    Raises:
        InvalidInputError: if either part is missing or cannot be parsed. The
            current time is never used as a stand-in.
    """
    if day is None or time_of_day is None:
        raise InvalidInputError("Both a date and a time are required")
    local = datetime.combine(_parse_date(day), _parse_time(time_of_day))
    return BUSINESS_TZ.localize(local).astimezone(STORAGE_TZ)


def to_display_timezone(instant: datetime) -> datetime:
    """Convert to the host (or configured display) timezone. Display only."""
    utc = _as_aware_utc(instant)
    if settings.display_timezone:
        return utc.astimezone(pytz.timezone(settings.display_timezone))
    return utc.astimezone()


def to_naive_utc(instant: datetime) -> datetime:
    """Convert to naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return _as_aware_utc(instant).replace(tzinfo=None)


def from_storage(value: datetime) -> datetime:
    """Read a stored naive UTC value back as an aware UTC instant."""
    return _as_aware_utc(value)


def format_business_label(instant: datetime) -> str:
    """Render e.g. ``" (09:30:00 AM) EDT"`` for the business wall clock."""
    local = to_business_timezone(instant)
    return f" ({local:%I:%M:%S %p}) {local.tzname()}"


def format_report_timestamp(instant: datetime) -> str:
    return to_business_timezone(instant).strftime(REPORT_FORMAT)


def format_date(instant: datetime) -> str:
    return to_business_timezone(instant).strftime(DAY_FORMAT)


def format_time(instant: datetime) -> str:
    return to_business_timezone(instant).strftime(LABEL_FORMAT)


def business_time_choices(on_date: date | str, step_minutes: int = 15) -> list[TimeChoice]:
    """
    Business-hours times for a date, for pre-populating time pickers.

    Each choice is labeled with the host display time followed by the
    business-timezone label, e.g. ``"14:00 (08:00:00 AM) EDT"``.
    """
    if step_minutes <= 0:
        raise InvalidInputError("step_minutes must be positive")
    day = _parse_date(on_date)
    current = datetime.combine(day, time(settings.business_start_hour, 0))
    last = datetime.combine(day, time(settings.business_end_hour, 0))
    step = timedelta(minutes=step_minutes)

    choices: list[TimeChoice] = []
    while current <= last:
        instant = to_storage_instant(day, current.time())
        label = to_display_timezone(instant).strftime(LABEL_FORMAT) + format_business_label(instant)
        choices.append(TimeChoice(current.time(), instant, label))
        current += step
    return choices


def business_period_bounds(period: str, now: datetime) -> tuple[datetime, datetime]:
    """
    ``[start, end)`` of the business-timezone calendar month or week holding ``now``.

    Weeks start on Monday. Both bounds are aware UTC instants at local midnight,
    so a month boundary follows the business wall clock, not UTC.
    """
    today = to_business_timezone(now).date()
    if period == "month":
        first = today.replace(day=1)
        following = (first + timedelta(days=32)).replace(day=1)
    elif period == "week":
        first = today - timedelta(days=today.weekday())
        following = first + timedelta(days=7)
    else:
        raise InvalidInputError(f"Unknown period: {period!r}")
    return to_storage_instant(first, time(0)), to_storage_instant(following, time(0))
