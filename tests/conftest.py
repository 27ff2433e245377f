import uuid
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moodjournal.core.database import Base, get_db
from moodjournal.auth.service import get_current_user_id

USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
OTHER_USER_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")


@pytest.fixture
def make_entry():
    """Factory for lightweight entries the analytics functions accept."""
    def _make(created_at, mood="Joy", content="", meal_type=None, **extra):
        return SimpleNamespace(
            id=extra.pop("id", uuid.uuid4()),
            created_at=created_at,
            mood=mood,
            content=content,
            meal_type=meal_type,
            profile_id=extra.pop("profile_id", None),
            **extra,
        )
    return _make


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def anon_client(db_session):
    from main import app

    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(anon_client):
    from main import app

    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    return anon_client
