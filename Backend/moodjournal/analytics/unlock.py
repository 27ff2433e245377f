"""
Tenure gate for the longer analytics views.

The monthly view opens once a profile has been journaling for 15 days and the
yearly view after 60, counted in local calendar days from the first entry.
Entry-count based gating is deliberately not offered.
"""
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, Optional

from moodjournal.analytics.aggregator import Period
from moodjournal.analytics.clock import local_today, to_local_date

MONTH_UNLOCK_DAYS = 15
YEAR_UNLOCK_DAYS = 60


@dataclass(frozen=True)
class UnlockStatus:
    tier: Period
    unlocked: bool
    days_active: int
    required_days: int
    days_remaining: int


def tier_thresholds(month_days: int = MONTH_UNLOCK_DAYS, year_days: int = YEAR_UNLOCK_DAYS) -> Dict[Period, int]:
    return {Period.WEEK: 0, Period.MONTH: month_days, Period.YEAR: year_days}


def days_active(entries: Iterable[Any], *, now: Optional[datetime] = None,
                tz: Optional[tzinfo] = None) -> int:
    """
    Whole calendar days between the earliest entry and ``now``.

    Entries without a usable timestamp are ignored. No entries, or a first
    entry dated after ``now``, gives 0.
    """
    first = None
    for entry in entries:
        day = to_local_date(getattr(entry, "created_at", None), tz)
        if day is not None and (first is None or day < first):
            first = day
    if first is None:
        return 0
    return max(0, (local_today(tz, now) - first).days)


def unlock_status(tier: Any, entries: Iterable[Any], *, now: Optional[datetime] = None,
                  tz: Optional[tzinfo] = None, thresholds: Optional[Dict[Period, int]] = None) -> UnlockStatus:
    """
    Gate decision for one analytics tier, with the numbers a locked overlay needs.

    Raises:
        ValueError: If ``tier`` is not "week", "month" or "year".
    """
    tier = Period(tier)
    required = (thresholds or tier_thresholds())[tier]
    active = days_active(entries, now=now, tz=tz)
    return UnlockStatus(
        tier=tier,
        unlocked=active >= required,
        days_active=active,
        required_days=required,
        days_remaining=max(0, required - active),
    )


def is_unlocked(tier: Any, entries: Iterable[Any], *, now: Optional[datetime] = None,
                tz: Optional[tzinfo] = None, thresholds: Optional[Dict[Period, int]] = None) -> bool:
    return unlock_status(tier, entries, now=now, tz=tz, thresholds=thresholds).unlocked
