from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from moodjournal.core.config import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
import moodjournal.profiles.models
import moodjournal.entries.models


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
