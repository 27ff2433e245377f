from typing import Optional, Tuple
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field, computed_field

TITLE_MAX_LENGTH = 20


def split_title(content: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Splits entry content into (title, body). A short first line followed by
    more text reads as a title; anything else is all body.
    """
    lines = (content or "").split("\n")
    first = lines[0].strip()
    if len(lines) > 1 and first and len(first) < TITLE_MAX_LENGTH:
        return first, " ".join(line.strip() for line in lines[1:] if line.strip())
    return None, (content or "").strip()


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class EntryBase(BaseSchema):
    id: UUID
    user_id: UUID
    profile_id: UUID
    content: str
    mood: str
    meal_type: Optional[str] = None
    image_url: Optional[str] = None
    is_public: bool = False
    created_at: datetime


class EntryCreate(BaseSchema):
    content: str = ""
    mood: str = Field("", max_length=60)
    meal_type: Optional[str] = None
    image_url: Optional[str] = None
    is_public: bool = False
    profile_id: Optional[UUID] = None
    created_at: Optional[datetime] = None


class EntryUpdate(BaseSchema):
    content: Optional[str] = None
    mood: Optional[str] = Field(None, max_length=60)
    meal_type: Optional[str] = None
    image_url: Optional[str] = None
    is_public: Optional[bool] = None
    created_at: Optional[datetime] = None


class EntryResponse(EntryBase):
    @computed_field
    @property
    def title(self) -> Optional[str]:
        return split_title(self.content)[0]

    @computed_field
    @property
    def body(self) -> str:
        return split_title(self.content)[1]
