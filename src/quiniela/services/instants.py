"""Date/time parsing for combined instants.

A quiniela's start and end are edited as two separate controls each: a
calendar date (``YYYY-MM-DD``) and a clock time (``HH:MM``, 24-hour). They
are merged with the literal rule ``{date}T{time}:00`` and interpreted as
local wall-clock time; no UTC conversion ever happens.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time

# Hour 00-23, minute 00-59, both zero-padded
_TIME_RE = re.compile(r"^(?:[01][0-9]|2[0-3]):[0-5][0-9]$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Production clock: current local wall-clock time (naive)."""
    return datetime.now()


def parse_date(value: object) -> date:
    """Coerce a draft date value into a :class:`date`.

    Raises:
        ValueError: If *value* is not a date or an ISO ``YYYY-MM-DD`` string.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _DATE_RE.match(value.strip()):
        return date.fromisoformat(value.strip())
    msg = f"Invalid date: {value!r}. Expected YYYY-MM-DD"
    raise ValueError(msg)


def parse_time(value: object) -> str:
    """Coerce a draft time value into its canonical ``HH:MM`` form.

    Raises:
        ValueError: If *value* is not a time or a valid ``HH:MM`` string.
    """
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, str) and _TIME_RE.match(value.strip()):
        return value.strip()
    msg = f"Invalid time: {value!r}. Expected HH:MM (24-hour)"
    raise ValueError(msg)


def combine(day: date | str, clock_time: time | str) -> datetime:
    """Merge a date and an ``HH:MM`` time into one naive local instant."""
    day_str = parse_date(day).isoformat()
    return datetime.fromisoformat(f"{day_str}T{parse_time(clock_time)}:00")


def format_local_timestamp(instant: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS`` without offset."""
    return instant.replace(tzinfo=None, microsecond=0).isoformat(timespec="seconds")


def to_local_naive(now: datetime) -> datetime:
    """Express *now* as naive local wall-clock time.

    Aware datetimes are converted to the local zone first; naive values are
    assumed to already be local.
    """
    if now.tzinfo is None:
        return now
    return now.astimezone().replace(tzinfo=None)
