"""Helpers for consistent date stamps and timestamps in daily log files."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

Clock = Callable[[], datetime]


def resolve_zone(name: Optional[str]) -> Optional[tzinfo]:
    """Return the zone called *name*, or ``None`` for the host's local time."""

    if not name:
        return None
    return ZoneInfo(name)


def _ensure_datetime(value: Union[str, datetime, int, float]) -> Optional[datetime]:
    """Normalise *value* to a :class:`~datetime.datetime` when possible."""

    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def current_datetime(zone: Optional[tzinfo] = None, *, clock: Optional[Clock] = None) -> datetime:
    """Return "now" from *clock*, converted into *zone* when one is given.

    Naive values produced by a custom clock are taken as already being in the
    target zone and are returned unchanged.
    """

    if clock is None:
        return datetime.now(zone)

    value = clock()
    if zone is not None and value.tzinfo is not None:
        return value.astimezone(zone)
    return value


def format_date_stamp(
    value: Union[str, datetime, int, float],
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Format *value* as the date part of a timed log filename.

    Parameters
    ----------
    value:
        A datetime, epoch seconds, or ISO-8601 like string.
    date_format:
        ``strftime`` pattern, ``YYYY-MM-DD`` by default.

    Raises
    ------
    ValueError
        If *value* cannot be interpreted as a point in time.
    """

    candidate = _ensure_datetime(value)
    if candidate is None:
        raise ValueError(f"Cannot derive a date stamp from {value!r}")
    return candidate.strftime(date_format)


def format_log_timestamp(value: Union[str, datetime, int, float]) -> Optional[str]:
    """Return *value* formatted as ``YYYY-MM-DD HH:MM:SS``."""

    candidate = _ensure_datetime(value)
    if candidate is None:
        return None
    return candidate.strftime(LOG_TIMESTAMP_FORMAT)


__all__ = [
    "Clock",
    "DEFAULT_DATE_FORMAT",
    "LOG_TIMESTAMP_FORMAT",
    "current_datetime",
    "format_date_stamp",
    "format_log_timestamp",
    "resolve_zone",
]
