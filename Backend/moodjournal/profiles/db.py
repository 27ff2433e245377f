import logging
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from moodjournal.entries.models import Entry
from moodjournal.profiles.models import SubProfile
from moodjournal.profiles.schemas import ProfileCreate

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "Me"
DEFAULT_PROFILE_EMOJI = "😎"


class LastProfileError(Exception):
    """Raised when deleting a profile would leave the account without one."""


def get_profile(db: Session, profile_id: UUID, user_id: UUID) -> Optional[SubProfile]:
    return db.query(SubProfile).filter(
        SubProfile.id == profile_id,
        SubProfile.user_id == user_id
    ).first()


def get_user_profiles(db: Session, user_id: UUID) -> List[SubProfile]:
    """
    Lists the sub-profiles of an account, creating the default "Me" profile
    for accounts that have none yet.
    """
    profiles = db.query(SubProfile).filter(SubProfile.user_id == user_id).all()
    if profiles:
        return profiles

    default = SubProfile(
        id=uuid4(),
        user_id=user_id,
        name=DEFAULT_PROFILE_NAME,
        type="human",
        avatar_emoji=DEFAULT_PROFILE_EMOJI,
    )
    db.add(default)
    db.commit()
    db.refresh(default)
    logger.info("Created default profile %s for user %s", default.id, user_id)
    return [default]


def get_default_profile(db: Session, user_id: UUID) -> SubProfile:
    """The account's first human profile, or its first profile of any type."""
    profiles = get_user_profiles(db, user_id)
    return next((p for p in profiles if p.type == "human"), profiles[0])


def create_profile(db: Session, profile: ProfileCreate, user_id: UUID) -> SubProfile:
    new_profile = SubProfile(
        id=uuid4(),
        user_id=user_id,
        name=profile.name,
        type=profile.type,
        avatar_emoji=profile.avatar_emoji,
    )
    db.add(new_profile)
    db.commit()
    db.refresh(new_profile)
    return new_profile


def delete_profile(db: Session, profile_id: UUID, user_id: UUID) -> Optional[SubProfile]:
    """
    Deletes a profile together with its entries.

    Raises:
        LastProfileError: If it is the account's only profile.
    """
    profile = get_profile(db, profile_id, user_id)
    if profile is None:
        return None

    remaining = db.query(SubProfile).filter(SubProfile.user_id == user_id).count()
    if remaining <= 1:
        raise LastProfileError("You must have at least one profile")

    db.query(Entry).filter(
        Entry.profile_id == profile_id,
        Entry.user_id == user_id
    ).delete()
    db.delete(profile)
    db.commit()
    return profile


def resolve_profile(db: Session, user_id: UUID, profile_id: Optional[UUID] = None) -> Optional[SubProfile]:
    """
    Picks the profile a request operates on: the given one when it belongs to
    the account, the default profile when none is given.
    """
    if profile_id is None:
        return get_default_profile(db, user_id)
    return get_profile(db, profile_id, user_id)
