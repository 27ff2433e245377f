"""
Period aggregation: weekly, monthly and yearly mood rollups.

Every reduction is a single pass over the entries. An entry lands in at most
one bucket, entries without a usable timestamp are counted as skipped, and an
empty bucket reports ``average_score=None`` rather than a neutral score so
trend lines break instead of inventing data.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from moodjournal.analytics.calendar_index import YearMonth
from moodjournal.analytics.clock import as_day, to_local_date, week_start
from moodjournal.analytics.moods import is_happy, normalize_label, score_of

logger = logging.getLogger(__name__)

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class DayBucket:
    label: str
    date: date
    counts_by_mood: Dict[str, int]
    total: int
    average_score: Optional[float]


@dataclass(frozen=True)
class MoodShare:
    name: str
    count: int
    percent_of_month: int


@dataclass(frozen=True)
class MonthBucket:
    label: str
    month: int
    happy_count: int
    total_count: int
    average_score: Optional[float]


@dataclass(frozen=True)
class Aggregation:
    period: Period
    start: date
    end: date
    buckets: Tuple[Any, ...]
    total: int = 0
    skipped: int = 0


def round_half_up(numerator: int, denominator: int, places: int = 0) -> Optional[Decimal]:
    """Exact ``numerator / denominator`` rounded half away from zero; None when dividing by zero."""
    if denominator == 0:
        return None
    quantum = Decimal(1).scaleb(-places)
    return (Decimal(numerator) / Decimal(denominator)).quantize(quantum, rounding=ROUND_HALF_UP)


def apportion_percents(counts: Sequence[int]) -> List[int]:
    """
    Whole percentages for ``counts`` that add up to exactly 100.

    Every share starts at its floor and the points left over go one each to the
    largest remainders, earlier positions first on ties. Each result is within
    one point of the exact share. All zeros when the counts sum to zero.
    """
    total = sum(counts)
    if total == 0:
        return [0] * len(counts)
    percents = [count * 100 // total for count in counts]
    leftover = 100 - sum(percents)
    by_remainder = sorted(range(len(counts)), key=lambda i: counts[i] * 100 % total, reverse=True)
    for index in by_remainder[:leftover]:
        percents[index] += 1
    return percents


@dataclass
class _Tally:
    counts: Counter = field(default_factory=Counter)
    total: int = 0
    score_sum: int = 0
    happy: int = 0

    def add(self, mood: Optional[str]) -> None:
        self.counts[normalize_label(mood)] += 1
        self.total += 1
        self.score_sum += score_of(mood)
        if is_happy(mood):
            self.happy += 1

    @property
    def average_score(self) -> Optional[float]:
        mean = round_half_up(self.score_sum, self.total, places=1)
        return float(mean) if mean is not None else None


def _dated(entries: Iterable[Any], tz: Optional[tzinfo], counter: Dict[str, int]) -> Iterator[Tuple[date, Any]]:
    """Yields (local day, entry) pairs, counting entries whose timestamp is unusable."""
    for entry in entries:
        day = to_local_date(getattr(entry, "created_at", None), tz)
        if day is None:
            counter["skipped"] += 1
            continue
        yield day, entry


def _day_bucket(day: date, tally: _Tally) -> DayBucket:
    return DayBucket(
        label=WEEKDAY_LABELS[(day.weekday() + 1) % 7],
        date=day,
        counts_by_mood=dict(tally.counts),
        total=tally.total,
        average_score=tally.average_score,
    )


def _log_skipped(period: str, skipped: int) -> None:
    if skipped:
        logger.debug("%s aggregation skipped %d entries without a usable timestamp", period, skipped)


def _aggregate_days(entries: Iterable[Any], days: Tuple[date, ...], period: Period,
                    tz: Optional[tzinfo]) -> Aggregation:
    tallies = {day: _Tally() for day in days}
    counter = Counter()
    for day, entry in _dated(entries, tz, counter):
        tally = tallies.get(day)
        if tally is not None:
            tally.add(getattr(entry, "mood", None))

    _log_skipped(period.value, counter["skipped"])
    buckets = tuple(_day_bucket(day, tallies[day]) for day in days)
    return Aggregation(
        period=period,
        start=days[0],
        end=days[-1],
        buckets=buckets,
        total=sum(b.total for b in buckets),
        skipped=counter["skipped"],
    )


def aggregate_week(entries: Iterable[Any], anchor_date: Any, *, tz: Optional[tzinfo] = None) -> Aggregation:
    """
    Seven day buckets, Sunday to Saturday, for the week holding ``anchor_date``.

    Each bucket tallies entries per mood label (custom labels verbatim, blank
    labels as "Other") and averages their valence scores to one decimal.
    """
    start = week_start(as_day(anchor_date, tz))
    days = tuple(start + timedelta(days=i) for i in range(7))
    return _aggregate_days(entries, days, Period.WEEK, tz)


def daily_trend(entries: Iterable[Any], anchor_date: Any, *, tz: Optional[tzinfo] = None) -> Aggregation:
    """One day bucket per date of the month holding ``anchor_date``; drives the month trend line."""
    month = YearMonth.from_date(as_day(anchor_date, tz))
    return _aggregate_days(entries, tuple(month.days()), Period.MONTH, tz)


def aggregate_month(entries: Iterable[Any], anchor_date: Any, *, tz: Optional[tzinfo] = None) -> Aggregation:
    """
    Mood distribution for the calendar month holding ``anchor_date``.

    Buckets are ``MoodShare``s sorted by count, most frequent first; equal
    counts keep the order in which the labels were first seen. Percentages
    are apportioned by largest remainder so they always total 100. A month
    with no entries has no buckets.
    """
    month = YearMonth.from_date(as_day(anchor_date, tz))
    counts: Dict[str, int] = {}
    counter = Counter()
    for day, entry in _dated(entries, tz, counter):
        if (day.year, day.month) != month:
            continue
        label = normalize_label(getattr(entry, "mood", None))
        counts[label] = counts.get(label, 0) + 1

    _log_skipped(Period.MONTH.value, counter["skipped"])
    total = sum(counts.values())
    shares = ()
    if total:
        # counts keeps first-seen order, which breaks remainder ties
        percents = dict(zip(counts, apportion_percents(list(counts.values()))))
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        shares = tuple(
            MoodShare(name=name, count=count, percent_of_month=percents[name])
            for name, count in ranked
        )

    days = month.days()
    return Aggregation(
        period=Period.MONTH,
        start=days[0],
        end=days[-1],
        buckets=shares,
        total=total,
        skipped=counter["skipped"],
    )


def aggregate_year(entries: Iterable[Any], anchor_date: Any, *, tz: Optional[tzinfo] = None) -> Aggregation:
    """Twelve month buckets, January to December, for the year holding ``anchor_date``."""
    year = as_day(anchor_date, tz).year
    tallies = [_Tally() for _ in MONTH_LABELS]
    counter = Counter()
    for day, entry in _dated(entries, tz, counter):
        if day.year == year:
            tallies[day.month - 1].add(getattr(entry, "mood", None))

    _log_skipped(Period.YEAR.value, counter["skipped"])
    buckets = tuple(
        MonthBucket(
            label=MONTH_LABELS[index],
            month=index + 1,
            happy_count=tally.happy,
            total_count=tally.total,
            average_score=tally.average_score,
        )
        for index, tally in enumerate(tallies)
    )
    return Aggregation(
        period=Period.YEAR,
        start=date(year, 1, 1),
        end=date(year, 12, 31),
        buckets=buckets,
        total=sum(b.total_count for b in buckets),
        skipped=counter["skipped"],
    )


_AGGREGATORS = {
    Period.WEEK: aggregate_week,
    Period.MONTH: aggregate_month,
    Period.YEAR: aggregate_year,
}


def aggregate(entries: Iterable[Any], period: Any, anchor_date: Any, *,
              tz: Optional[tzinfo] = None) -> Aggregation:
    """
    Dispatches to the weekly, monthly or yearly reduction.

    Raises:
        ValueError: If ``period`` is not "week", "month" or "year".
    """
    return _AGGREGATORS[Period(period)](entries, anchor_date, tz=tz)
