"""
Local calendar-day arithmetic for the analytics engine.

Entries are bucketed by the calendar day they were written on in the user's
own time zone, so every function here takes the zone explicitly instead of
reading the host's local time.
"""
import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from moodjournal.core.config import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Looks up an IANA time zone by name.

    Args:
        name (Optional[str]): Zone name such as "Europe/Berlin". None or blank
            selects the configured default zone.

    Returns:
        tzinfo: The zone.

    Raises:
        ValueError: If the zone is unknown.
    """
    key = (name or "").strip() or DEFAULT_TIMEZONE
    if key.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown time zone: {key}")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Coerces a stored timestamp into a datetime, or None when it is unusable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def to_local_date(value: Any, tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    The calendar day a timestamp falls on in ``tz``.

    Naive datetimes are taken as UTC. Returns None for missing or malformed
    values, and for instants that fall outside the representable date range
    once shifted into ``tz``, so callers can skip the entry.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.astimezone(tz or timezone.utc).date()
    except OverflowError:
        logger.debug("Timestamp %s is out of range in %s", moment.isoformat(), tz)
        return None


def local_today(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> date:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz or timezone.utc).date()


def as_day(anchor: Any, tz: Optional[tzinfo] = None) -> date:
    """Anchor dates may be given as a date, a datetime or an ISO string."""
    if isinstance(anchor, date) and not isinstance(anchor, datetime):
        return anchor
    day = to_local_date(anchor, tz)
    if day is None:
        raise ValueError(f"Invalid anchor date: {anchor!r}")
    return day


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def sunday_index(day: date) -> int:
    """Weekday index with Sunday as 0."""
    return (day.weekday() + 1) % 7
