import uuid
from sqlalchemy import Column, String, Uuid
from moodjournal.core.database import Base


class SubProfile(Base):
    __tablename__ = "sub_profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), index=True, nullable=False)  # account id from the bearer token

    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="human")  # "human" or "pet"
    avatar_emoji = Column(String, nullable=False, default="😎")
