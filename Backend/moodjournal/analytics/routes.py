from datetime import date
from typing import List, Optional
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Security
from pydantic import ValidationError
from sqlalchemy.orm import Session

from moodjournal.auth.service import get_current_user_id
from moodjournal.core.database import get_db
from moodjournal.analytics.schemas import CalendarOut, MonthOut, MoodTableOut, UnlockOut, WeekOut, YearOut
from moodjournal.analytics.service import (
    ProfileNotFoundError,
    ViewLockedError,
    calendar_view,
    month_view,
    mood_table,
    unlock_view,
    week_view,
    year_view,
)

router = APIRouter(prefix="/analytics", tags=["Analytics"])
logger = logging.getLogger(__name__)

TZ_DESCRIPTION = "IANA time zone whose midnight separates days, e.g. Europe/Berlin. Defaults to the server setting."


def _run(view, *args, **kwargs):
    """Calls an analytics view, mapping its errors onto HTTP responses."""
    try:
        return view(*args, **kwargs)
    except ProfileNotFoundError:
        raise HTTPException(status_code=404, detail="Profile not found")
    except ViewLockedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValidationError as e:
        logger.error(f"Analytics view {view.__name__} built an invalid response: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute analytics")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Analytics view {view.__name__} failed for user {kwargs.get('user_id')}: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute analytics")


@router.get(
    "/calendar",
    response_model=CalendarOut,
    summary="Month calendar with search",
    description="Day cells for one month, each marked empty, has-entry, match or dim. "
                "Mood and keyword filters are exclusive; when both are given the mood filter wins.",
    responses={
        200: {"description": "Calendar computed successfully."},
        400: {"description": "Invalid month or time zone."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
    },
)
def calendar_route(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    keyword: Optional[str] = Query(None, max_length=100),
    mood: Optional[str] = Query(None, max_length=60),
    profile_id: Optional[UUID] = Query(None),
    tz: Optional[str] = Query(None, description=TZ_DESCRIPTION),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> CalendarOut:
    return _run(
        calendar_view, db, user_id=user_id, profile_id=profile_id,
        year=year, month=month, keyword=keyword, mood=mood, tz_name=tz,
    )


@router.get(
    "/week",
    response_model=WeekOut,
    summary="Weekly mood rollup",
    description="Seven day buckets, Sunday to Saturday, for the week containing the anchor date.",
    responses={
        200: {"description": "Week computed successfully."},
        400: {"description": "Invalid time zone."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
    },
)
def week_route(
    anchor: Optional[date] = Query(None, description="Any date in the week. Defaults to today."),
    profile_id: Optional[UUID] = Query(None),
    tz: Optional[str] = Query(None, description=TZ_DESCRIPTION),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> WeekOut:
    return _run(week_view, db, user_id=user_id, profile_id=profile_id, anchor=anchor, tz_name=tz)


@router.get(
    "/month",
    response_model=MonthOut,
    summary="Monthly mood distribution",
    description="Mood shares and daily scores for the month containing the anchor date. "
                "Locked until the profile has been active for the required number of days.",
    responses={
        200: {"description": "Month computed successfully."},
        400: {"description": "Invalid time zone."},
        401: {"description": "Unauthorized."},
        403: {"description": "Monthly view still locked."},
        404: {"description": "Profile not found."},
    },
)
def month_route(
    anchor: Optional[date] = Query(None, description="Any date in the month. Defaults to today."),
    profile_id: Optional[UUID] = Query(None),
    tz: Optional[str] = Query(None, description=TZ_DESCRIPTION),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> MonthOut:
    return _run(month_view, db, user_id=user_id, profile_id=profile_id, anchor=anchor, tz_name=tz)


@router.get(
    "/year",
    response_model=YearOut,
    summary="Yearly happy-month overview",
    description="Happy and total entry counts for each month of the year containing the anchor date. "
                "Locked until the profile has been active for the required number of days.",
    responses={
        200: {"description": "Year computed successfully."},
        400: {"description": "Invalid time zone."},
        401: {"description": "Unauthorized."},
        403: {"description": "Yearly view still locked."},
        404: {"description": "Profile not found."},
    },
)
def year_route(
    anchor: Optional[date] = Query(None, description="Any date in the year. Defaults to today."),
    profile_id: Optional[UUID] = Query(None),
    tz: Optional[str] = Query(None, description=TZ_DESCRIPTION),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> YearOut:
    return _run(year_view, db, user_id=user_id, profile_id=profile_id, anchor=anchor, tz_name=tz)


@router.get(
    "/unlock",
    response_model=List[UnlockOut],
    summary="Analytics unlock status",
    description="Tenure in days and the lock state of the week, month and year views.",
    responses={
        200: {"description": "Unlock status computed successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
    },
)
def unlock_route(
    profile_id: Optional[UUID] = Query(None),
    tz: Optional[str] = Query(None, description=TZ_DESCRIPTION),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[UnlockOut]:
    return _run(unlock_view, db, user_id=user_id, profile_id=profile_id, tz_name=tz)


@router.get(
    "/moods",
    response_model=MoodTableOut,
    summary="Mood scoring table",
    description="The versioned table of known moods and their valence scores.",
)
def moods_route() -> MoodTableOut:
    return mood_table()
