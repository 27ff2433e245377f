from uuid import UUID
from typing import List, Dict, Literal, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Security
from sqlalchemy.orm import Session

from moodjournal.analytics.calendar_index import search_entries
from moodjournal.auth.service import get_current_user_id
from moodjournal.core.database import get_db
from moodjournal.entries.schemas import EntryCreate, EntryUpdate, EntryResponse
from moodjournal.entries.db import (
    create_entry,
    delete_entry,
    get_entry,
    list_entries,
    update_entry,
)
from moodjournal.profiles.db import resolve_profile

router = APIRouter(prefix="/entries", tags=["Entries"])
logger = logging.getLogger(__name__)


def _profile_or_404(db: Session, user_id: UUID, profile_id: Optional[UUID]):
    profile = resolve_profile(db, user_id, profile_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get(
    "",
    response_model=List[EntryResponse],
    summary="List entries of a profile",
    description="Retrieve a paginated list of one profile's entries, newest first unless order=asc. "
                "Without profile_id the account's default profile is used.",
    responses={
        200: {"description": "Entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Failed to retrieve entries."},
    },
)
def list_entries_route(
    profile_id: Optional[UUID] = Query(None),
    order: Literal["asc", "desc"] = Query("desc"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[EntryResponse]:
    try:
        profile = _profile_or_404(db, user_id, profile_id)
        return list_entries(db, user_id, profile.id, ascending=order == "asc", skip=skip, limit=limit)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching entries for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch entries")


@router.get(
    "/search",
    response_model=List[EntryResponse],
    summary="Search entries by keyword",
    description="Case-insensitive substring search over the content and meal type of one profile's entries.",
    responses={
        200: {"description": "Matching entries, newest first."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Search failed."},
    },
)
def search_entries_route(
    keyword: str = Query(..., max_length=100),
    profile_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[EntryResponse]:
    try:
        profile = _profile_or_404(db, user_id, profile_id)
        return search_entries(list_entries(db, user_id, profile.id), keyword)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error searching entries for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to search entries")


@router.get(
    "/{entry_id}",
    response_model=EntryResponse,
    summary="Get an entry by ID",
    responses={
        200: {"description": "Entry retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to retrieve entry."},
    },
)
def read_entry_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> EntryResponse:
    try:
        entry = get_entry(db, entry_id, user_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return entry
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve entry")


@router.post(
    "",
    response_model=EntryResponse,
    summary="Create a new entry",
    description="Record a mood, meal or journal entry for one of the account's profiles.",
    responses={
        200: {"description": "Entry created successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Failed to create entry."},
    },
)
def create_entry_route(
    entry: EntryCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> EntryResponse:
    try:
        profile = _profile_or_404(db, user_id, entry.profile_id)
        return create_entry(db, entry, user_id, profile.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating entry for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create entry")


@router.put(
    "/{entry_id}",
    response_model=EntryResponse,
    summary="Update an entry",
    responses={
        200: {"description": "Entry updated successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to update entry."},
    },
)
def update_entry_route(
    entry_id: UUID,
    entry: EntryUpdate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> EntryResponse:
    try:
        updated = update_entry(db, entry_id, entry, user_id)
        if updated is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return updated
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update entry")


@router.delete(
    "/{entry_id}",
    response_model=Dict[str, str],
    summary="Delete an entry",
    responses={
        200: {"description": "Entry deleted successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to delete entry."},
    },
)
def delete_entry_route(
    entry_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_entry(db, entry_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Entry not found")
        return {"detail": "Entry deleted successfully."}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting entry {entry_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete entry")
