from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from moodjournal.entries.models import Entry
from moodjournal.entries.schemas import EntryCreate, EntryUpdate

REQUIRED_FIELDS = {"content", "mood", "is_public", "created_at"}


def as_utc(value: Optional[datetime]) -> datetime:
    """Normalizes a timestamp to aware UTC; naive values are taken as UTC already."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_entry(db: Session, entry_id: UUID, user_id: UUID) -> Optional[Entry]:
    return db.query(Entry).filter(
        Entry.id == entry_id,
        Entry.user_id == user_id
    ).first()


def list_entries(
    db: Session,
    user_id: UUID,
    profile_id: UUID,
    ascending: bool = False,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[Entry]:
    """
    Lists the entries of one profile of one account, ordered by creation time.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): Owning account.
        profile_id (UUID): Sub-profile whose entries are returned.
        ascending (bool): Oldest first when True, newest first otherwise.
        skip (int): Offset for pagination.
        limit (Optional[int]): Max number of results, None for all.

    Returns:
        List[Entry]: The profile's entries.
    """
    order = Entry.created_at.asc() if ascending else Entry.created_at.desc()
    query = db.query(Entry).filter(
        Entry.user_id == user_id,
        Entry.profile_id == profile_id
    ).order_by(order, Entry.id).offset(skip)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def create_entry(db: Session, entry: EntryCreate, user_id: UUID, profile_id: UUID) -> Entry:
    new_entry = Entry(
        id=uuid4(),
        user_id=user_id,
        profile_id=profile_id,
        content=entry.content,
        mood=entry.mood,
        meal_type=entry.meal_type,
        image_url=entry.image_url,
        is_public=entry.is_public,
        created_at=as_utc(entry.created_at),
    )
    db.add(new_entry)
    db.commit()
    db.refresh(new_entry)
    return new_entry


def update_entry(db: Session, entry_id: UUID, updated_entry: EntryUpdate, user_id: UUID) -> Optional[Entry]:
    entry = get_entry(db, entry_id, user_id)
    if entry:
        update_data = {
            field: value
            for field, value in updated_entry.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_FIELDS
        }
        if "created_at" in update_data:
            update_data["created_at"] = as_utc(update_data["created_at"])
        for field, value in update_data.items():
            setattr(entry, field, value)
        db.commit()
        db.refresh(entry)
        return entry
    return None


def delete_entry(db: Session, entry_id: UUID, user_id: UUID) -> Optional[Entry]:
    entry = get_entry(db, entry_id, user_id)
    if entry:
        db.delete(entry)
        db.commit()
        return entry
    return None
