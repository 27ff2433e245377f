from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, computed_field

from moodjournal.analytics.aggregator import Period
from moodjournal.analytics.calendar_index import DayStatus
from moodjournal.analytics.moods import describe_score, emoji_for


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class DayCellOut(BaseSchema):
    date: date
    status: DayStatus
    entry_count: int = 0
    is_today: bool = False


class CalendarOut(BaseSchema):
    profile_id: UUID
    year: int
    month: int
    leading_blanks: int
    cells: List[DayCellOut]
    skipped: int = 0
    mood: Optional[str] = None
    keyword: Optional[str] = None


class DayBucketOut(BaseSchema):
    label: str
    date: date
    counts_by_mood: Dict[str, int]
    total: int
    average_score: Optional[float] = None

    @computed_field
    @property
    def tone(self) -> Optional[str]:
        return describe_score(self.average_score)


class WeekOut(BaseSchema):
    profile_id: UUID
    start: date
    end: date
    buckets: List[DayBucketOut]
    total: int
    skipped: int = 0


class MoodShareOut(BaseSchema):
    name: str
    count: int
    percent_of_month: int

    @computed_field
    @property
    def emoji(self) -> str:
        return emoji_for(self.name)


class MonthOut(BaseSchema):
    profile_id: UUID
    start: date
    end: date
    shares: List[MoodShareOut]
    daily: List[DayBucketOut]
    total: int
    skipped: int = 0


class MonthBucketOut(BaseSchema):
    label: str
    month: int
    happy_count: int
    total_count: int
    average_score: Optional[float] = None


class YearOut(BaseSchema):
    profile_id: UUID
    start: date
    end: date
    buckets: List[MonthBucketOut]
    total: int
    skipped: int = 0


class UnlockOut(BaseSchema):
    tier: Period
    unlocked: bool
    days_active: int
    required_days: int
    days_remaining: int


class MoodDefinitionOut(BaseSchema):
    name: str
    score: int
    emoji: str
    is_happy: bool


class MoodTableOut(BaseSchema):
    version: str
    fallback_score: int
    moods: List[MoodDefinitionOut]
