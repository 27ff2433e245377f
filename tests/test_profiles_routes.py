"""Tests for the sub-profile routes."""

from conftest import OTHER_USER_ID
from moodjournal.entries.models import Entry
from moodjournal.profiles.models import SubProfile


def test_default_profile_created_on_first_access(client, db_session):
    """Should create a single "Me" profile for a new account."""
    resp = client.get("/profiles")
    assert resp.status_code == 200
    profiles = resp.json()
    assert len(profiles) == 1
    assert profiles[0]["name"] == "Me"
    assert profiles[0]["type"] == "human"

    assert len(client.get("/profiles").json()) == 1


def test_create_pet_profile(client):
    """Should add a pet profile with an emoji avatar."""
    resp = client.post("/profiles", json={"name": "  Mochi ", "type": "pet", "avatar_emoji": "🐶"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Mochi"
    assert resp.json()["type"] == "pet"


def test_reject_invalid_profiles(client):
    """Should validate avatar, type and name."""
    assert client.post("/profiles", json={"name": "Mochi", "avatar_emoji": "dog"}).status_code == 422
    assert client.post("/profiles", json={"name": "Mochi", "type": "robot"}).status_code == 422
    assert client.post("/profiles", json={"name": "   "}).status_code == 422


def test_cannot_delete_last_profile(client):
    """Should refuse to delete the only profile."""
    me = client.get("/profiles").json()[0]
    resp = client.delete(f"/profiles/{me['id']}")
    assert resp.status_code == 400


def test_delete_profile_removes_its_entries(client, db_session):
    """Should delete a profile together with its entries."""
    client.get("/profiles")
    pet = client.post("/profiles", json={"name": "Mochi", "type": "pet", "avatar_emoji": "🐶"}).json()
    client.post("/entries", json={"content": "walk", "mood": "Joy", "profile_id": pet["id"]})

    resp = client.delete(f"/profiles/{pet['id']}")
    assert resp.status_code == 200
    assert db_session.query(Entry).count() == 0
    assert len(client.get("/profiles").json()) == 1


def test_cannot_delete_other_accounts_profile(client, db_session):
    """Should answer 404 for a profile owned by another account."""
    foreign = SubProfile(user_id=OTHER_USER_ID, name="Them", type="human", avatar_emoji="😎")
    db_session.add(foreign)
    db_session.commit()

    assert client.delete(f"/profiles/{foreign.id}").status_code == 404
