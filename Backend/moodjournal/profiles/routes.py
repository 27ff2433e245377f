from uuid import UUID
from typing import List, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Security
from sqlalchemy.orm import Session

from moodjournal.auth.service import get_current_user_id
from moodjournal.core.database import get_db
from moodjournal.profiles.schemas import ProfileCreate, ProfileResponse
from moodjournal.profiles.db import (
    LastProfileError,
    create_profile,
    delete_profile,
    get_user_profiles,
)

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[ProfileResponse],
    summary="List sub-profiles",
    description="List the sub-profiles (the user and their pets) of the authenticated account. "
                "A default profile is created on first access.",
    responses={
        200: {"description": "Profiles retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve profiles."},
    },
)
def read_profiles_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[ProfileResponse]:
    try:
        return get_user_profiles(db, user_id)
    except Exception as e:
        logger.error(f"Failed to fetch profiles for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve profiles")


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create a sub-profile",
    responses={
        200: {"description": "Profile created successfully."},
        401: {"description": "Unauthorized."},
        422: {"description": "Invalid name, type or avatar."},
        500: {"description": "Failed to create profile."},
    },
)
def create_profile_route(
    profile: ProfileCreate,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> ProfileResponse:
    try:
        return create_profile(db, profile, user_id)
    except Exception as e:
        logger.error(f"Failed to create profile for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create profile")


@router.delete(
    "/{profile_id}",
    response_model=Dict[str, str],
    summary="Delete a sub-profile",
    description="Delete a sub-profile and all of its entries. The last profile cannot be deleted.",
    responses={
        200: {"description": "Profile deleted successfully."},
        400: {"description": "Cannot delete the last profile."},
        401: {"description": "Unauthorized."},
        404: {"description": "Profile not found."},
        500: {"description": "Failed to delete profile."},
    },
)
def delete_profile_route(
    profile_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Dict[str, str]:
    try:
        deleted = delete_profile(db, profile_id, user_id)
        if deleted is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return {"detail": "Profile deleted successfully."}
    except LastProfileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete profile {profile_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete profile")
