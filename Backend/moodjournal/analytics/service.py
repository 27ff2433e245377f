import logging
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from moodjournal.analytics.aggregator import Period, aggregate_month, aggregate_week, aggregate_year, daily_trend
from moodjournal.analytics.calendar_index import CalendarFilter, YearMonth, build_calendar
from moodjournal.analytics.clock import local_today, resolve_timezone
from moodjournal.analytics.moods import FALLBACK_SCORE, MOOD_TABLE, MOOD_TABLE_VERSION
from moodjournal.analytics.schemas import (
    CalendarOut,
    MonthOut,
    MoodDefinitionOut,
    MoodTableOut,
    UnlockOut,
    WeekOut,
    YearOut,
)
from moodjournal.analytics.unlock import tier_thresholds, unlock_status
from moodjournal.core.config import MONTH_UNLOCK_DAYS, YEAR_UNLOCK_DAYS
from moodjournal.entries.db import list_entries
from moodjournal.entries.models import Entry
from moodjournal.profiles.db import resolve_profile
from moodjournal.profiles.models import SubProfile

logger = logging.getLogger(__name__)

THRESHOLDS = tier_thresholds(MONTH_UNLOCK_DAYS, YEAR_UNLOCK_DAYS)


class ProfileNotFoundError(LookupError):
    """The requested profile does not exist or belongs to another account."""


class ViewLockedError(PermissionError):
    """The profile has not been journaling long enough for the requested view."""

    def __init__(self, status: UnlockOut):
        super().__init__(
            f"The {status.tier.value} view unlocks after {status.required_days} days "
            f"({status.days_remaining} to go)"
        )
        self.status = status


def load_profile_entries(db: Session, user_id: UUID, profile_id: Optional[UUID]) -> Tuple[SubProfile, List[Entry]]:
    """
    Fetches one profile's entries, oldest first. Analytics never mixes the
    entries of different profiles.
    """
    profile = resolve_profile(db, user_id, profile_id)
    if profile is None:
        raise ProfileNotFoundError(f"Profile {profile_id} not found")
    return profile, list_entries(db, user_id, profile.id, ascending=True)


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _check_unlocked(tier: Period, entries: List[Entry], tz, now: datetime) -> None:
    status = UnlockOut.model_validate(asdict(unlock_status(tier, entries, now=now, tz=tz, thresholds=THRESHOLDS)))
    if not status.unlocked:
        raise ViewLockedError(status)


def calendar_view(
    db: Session,
    user_id: UUID,
    profile_id: Optional[UUID] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    keyword: Optional[str] = None,
    mood: Optional[str] = None,
    tz_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CalendarOut:
    tz = resolve_timezone(tz_name)
    today = local_today(tz, _now(now))
    target = YearMonth(year or today.year, month or today.month)

    search = CalendarFilter(keyword=keyword, mood=mood)
    if search.active_mood is not None and (keyword or "").strip():
        logger.debug("Both mood and keyword given for calendar; mood filter wins")

    profile, entries = load_profile_entries(db, user_id, profile_id)
    grid = build_calendar(target, entries, search, tz=tz, today=today)
    return CalendarOut.model_validate({
        **asdict(grid),
        "profile_id": profile.id,
        "mood": search.active_mood,
        "keyword": search.keyword if search.active_keyword else None,
    })


def week_view(
    db: Session,
    user_id: UUID,
    profile_id: Optional[UUID] = None,
    anchor: Optional[date] = None,
    tz_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> WeekOut:
    tz = resolve_timezone(tz_name)
    profile, entries = load_profile_entries(db, user_id, profile_id)
    result = aggregate_week(entries, anchor or local_today(tz, _now(now)), tz=tz)
    return WeekOut.model_validate({**asdict(result), "profile_id": profile.id})


def month_view(
    db: Session,
    user_id: UUID,
    profile_id: Optional[UUID] = None,
    anchor: Optional[date] = None,
    tz_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> MonthOut:
    """
    Mood shares and the daily score line for one month.

    Raises:
        ViewLockedError: If the month tier is still locked for the profile.
    """
    tz = resolve_timezone(tz_name)
    now = _now(now)
    profile, entries = load_profile_entries(db, user_id, profile_id)
    _check_unlocked(Period.MONTH, entries, tz, now)

    anchor = anchor or local_today(tz, now)
    shares = aggregate_month(entries, anchor, tz=tz)
    daily = daily_trend(entries, anchor, tz=tz)
    return MonthOut.model_validate({
        "profile_id": profile.id,
        "start": shares.start,
        "end": shares.end,
        "shares": [asdict(share) for share in shares.buckets],
        "daily": [asdict(bucket) for bucket in daily.buckets],
        "total": shares.total,
        "skipped": shares.skipped,
    })


def year_view(
    db: Session,
    user_id: UUID,
    profile_id: Optional[UUID] = None,
    anchor: Optional[date] = None,
    tz_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> YearOut:
    """
    Happy/total counts per month for one year.

    Raises:
        ViewLockedError: If the year tier is still locked for the profile.
    """
    tz = resolve_timezone(tz_name)
    now = _now(now)
    profile, entries = load_profile_entries(db, user_id, profile_id)
    _check_unlocked(Period.YEAR, entries, tz, now)

    result = aggregate_year(entries, anchor or local_today(tz, now), tz=tz)
    return YearOut.model_validate({**asdict(result), "profile_id": profile.id})


def unlock_view(
    db: Session,
    user_id: UUID,
    profile_id: Optional[UUID] = None,
    tz_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[UnlockOut]:
    tz = resolve_timezone(tz_name)
    now = _now(now)
    _, entries = load_profile_entries(db, user_id, profile_id)
    return [
        UnlockOut.model_validate(asdict(unlock_status(tier, entries, now=now, tz=tz, thresholds=THRESHOLDS)))
        for tier in Period
    ]


def mood_table() -> MoodTableOut:
    return MoodTableOut(
        version=MOOD_TABLE_VERSION,
        fallback_score=FALLBACK_SCORE,
        moods=[MoodDefinitionOut.model_validate(mood) for mood in MOOD_TABLE],
    )
