from typing import Literal
from uuid import UUID

import emoji
from pydantic import BaseModel, Field, field_validator


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class ProfileCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=40)
    type: Literal["human", "pet"] = "human"
    avatar_emoji: str = "😎"

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Profile name must not be blank")
        return value

    @field_validator("avatar_emoji")
    @classmethod
    def check_avatar(cls, value: str) -> str:
        if not emoji.is_emoji(value):
            raise ValueError("Avatar must be a single emoji")
        return value


class ProfileResponse(BaseSchema):
    id: UUID
    user_id: UUID
    name: str
    type: str
    avatar_emoji: str
