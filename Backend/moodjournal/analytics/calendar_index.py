"""
Calendar indexing: lays a month of entries out as day cells and marks which
days match the active search.
"""
import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, tzinfo
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from moodjournal.analytics.clock import sunday_index, to_local_date

logger = logging.getLogger(__name__)


class DayStatus(str, Enum):
    EMPTY = "empty"
    HAS_ENTRY = "has-entry"
    MATCH = "match"
    DIM = "dim"


class YearMonth(NamedTuple):
    year: int
    month: int

    @classmethod
    def from_date(cls, day: date) -> "YearMonth":
        return cls(day.year, day.month)

    def validate(self) -> "YearMonth":
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Invalid year: {self.year}")
        return self

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def length(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def days(self) -> List[date]:
        return [date(self.year, self.month, d) for d in range(1, self.length + 1)]

    def previous(self) -> "YearMonth":
        if self.month == 1:
            return YearMonth(self.year - 1, 12)
        return YearMonth(self.year, self.month - 1)

    def next(self) -> "YearMonth":
        if self.month == 12:
            return YearMonth(self.year + 1, 1)
        return YearMonth(self.year, self.month + 1)


@dataclass(frozen=True)
class CalendarFilter:
    """
    Search applied to the calendar. Mood and keyword are exclusive: build
    filters with by_mood() / by_keyword(). If both are set anyway, the mood
    filter wins. Either criterion is inactive when blank after trimming.
    """
    keyword: Optional[str] = None
    mood: Optional[str] = None

    @classmethod
    def by_mood(cls, mood: str) -> "CalendarFilter":
        return cls(mood=mood)

    @classmethod
    def by_keyword(cls, keyword: str) -> "CalendarFilter":
        return cls(keyword=keyword)

    @property
    def active_mood(self) -> Optional[str]:
        mood = (self.mood or "").strip()
        return mood or None

    @property
    def active_keyword(self) -> Optional[str]:
        if self.active_mood is not None or self.keyword is None:
            return None
        needle = self.keyword.strip()
        return needle.casefold() if needle else None


@dataclass(frozen=True)
class DayCell:
    date: date
    status: DayStatus
    entry_count: int = 0
    is_today: bool = False


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    cells: Tuple[DayCell, ...]
    skipped: int = 0


def matches_keyword(entry: Any, needle: str) -> bool:
    """Case-insensitive substring match on content and meal type. ``needle`` is already case-folded."""
    content = getattr(entry, "content", None) or ""
    meal_type = getattr(entry, "meal_type", None) or ""
    return needle in content.casefold() or needle in meal_type.casefold()


def _status_for(day_entries: List[Any], search: CalendarFilter) -> DayStatus:
    if not day_entries:
        return DayStatus.EMPTY

    mood = search.active_mood
    if mood is not None:
        hit = any(getattr(e, "mood", None) == mood for e in day_entries)
        return DayStatus.MATCH if hit else DayStatus.DIM

    needle = search.active_keyword
    if needle is not None:
        hit = any(matches_keyword(e, needle) for e in day_entries)
        return DayStatus.MATCH if hit else DayStatus.DIM

    return DayStatus.HAS_ENTRY


def build_calendar(
    month: YearMonth,
    entries: Iterable[Any],
    search: Optional[CalendarFilter] = None,
    *,
    tz: Optional[tzinfo] = None,
    today: Optional[date] = None,
) -> CalendarMonth:
    """
    Builds the day grid for one month.

    Args:
        month (YearMonth): Month to lay out.
        entries (Iterable): Entries of a single profile; anything with
            ``created_at``, ``mood``, ``content`` and ``meal_type`` attributes.
        search (Optional[CalendarFilter]): Mood or keyword search.
        tz (Optional[tzinfo]): Zone whose midnight separates days. UTC if None.
        today (Optional[date]): Marks the matching cell ``is_today``; never
            affects status.

    Returns:
        CalendarMonth: Leading blank count (weekday of day 1, Sunday = 0) and
        one cell per date in ascending order.
    """
    month = YearMonth(*month).validate()
    search = search or CalendarFilter()

    by_day: Dict[date, List[Any]] = defaultdict(list)
    skipped = 0
    for entry in entries:
        day = to_local_date(getattr(entry, "created_at", None), tz)
        if day is None:
            skipped += 1
            continue
        if (day.year, day.month) == (month.year, month.month):
            by_day[day].append(entry)

    if skipped:
        logger.debug("Calendar %04d-%02d skipped %d entries without a usable timestamp",
                     month.year, month.month, skipped)

    cells = tuple(
        DayCell(
            date=day,
            status=_status_for(by_day.get(day, []), search),
            entry_count=len(by_day.get(day, [])),
            is_today=today is not None and day == today,
        )
        for day in month.days()
    )
    return CalendarMonth(
        year=month.year,
        month=month.month,
        leading_blanks=sunday_index(month.first_day),
        cells=cells,
        skipped=skipped,
    )


def search_entries(entries: Iterable[Any], keyword: Optional[str]) -> List[Any]:
    """Entries whose content or meal type contains ``keyword``, in input order."""
    needle = (keyword or "").strip().casefold()
    if not needle:
        return []
    return [entry for entry in entries if matches_keyword(entry, needle)]
