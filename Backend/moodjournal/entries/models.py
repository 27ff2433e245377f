import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Uuid
from moodjournal.core.database import Base


class Entry(Base):
    __tablename__ = "entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), index=True, nullable=False)  # account id from the bearer token
    profile_id = Column(Uuid(as_uuid=True), ForeignKey("sub_profiles.id"), index=True, nullable=False)

    content = Column(Text, nullable=False, default="")
    mood = Column(String, nullable=False, default="")  # known label or custom text
    meal_type = Column(String, nullable=True)  # "Life" marks a non-food entry
    image_url = Column(String, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True,
                        default=lambda: datetime.now(timezone.utc))
