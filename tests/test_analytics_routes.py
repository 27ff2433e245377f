"""Tests for the analytics routes."""

from datetime import datetime, timezone


def seed(client, *entries):
    for content, mood, created_at in entries:
        resp = client.post("/entries", json={"content": content, "mood": mood, "created_at": created_at})
        assert resp.status_code == 200, resp.text


def test_week_route(client):
    """Should return the seven-day rollup of the default profile."""
    seed(
        client,
        ("brunch", "Joy", "2025-01-05T10:00:00Z"),
        ("rain", "Sad", "2025-01-05T18:00:00Z"),
        ("work", "Stressed", "2025-01-07T09:00:00Z"),
    )
    resp = client.get("/analytics/week", params={"anchor": "2025-01-08", "tz": "UTC"})
    assert resp.status_code == 200
    body = resp.json()

    assert body["start"] == "2025-01-05"
    assert body["end"] == "2025-01-11"
    assert body["total"] == 3
    sunday = body["buckets"][0]
    assert sunday["counts_by_mood"] == {"Joy": 1, "Sad": 1}
    assert sunday["average_score"] == 3.0
    assert sunday["tone"] == "Okay"
    assert body["buckets"][1]["average_score"] is None


def test_calendar_route_with_keyword(client):
    """Should mark matching and dimmed days for a keyword search."""
    seed(
        client,
        ("Pizza night!", "Joy", "2025-06-03T19:00:00Z"),
        ("Salad", "Calm", "2025-06-04T12:00:00Z"),
    )
    resp = client.get("/analytics/calendar", params={"year": 2025, "month": 6, "keyword": "pizza"})
    assert resp.status_code == 200
    body = resp.json()

    assert body["leading_blanks"] == 0
    assert len(body["cells"]) == 30
    assert body["cells"][2]["status"] == "match"
    assert body["cells"][3]["status"] == "dim"
    assert body["cells"][4]["status"] == "empty"
    assert body["keyword"] == "pizza"
    assert body["mood"] is None


def test_calendar_route_mood_wins(client):
    """Should apply the mood filter when both filters are sent."""
    seed(client, ("Pizza night!", "Joy", "2025-06-03T19:00:00Z"))
    body = client.get(
        "/analytics/calendar",
        params={"year": 2025, "month": 6, "keyword": "pizza", "mood": "Sad"},
    ).json()

    assert body["cells"][2]["status"] == "dim"
    assert body["mood"] == "Sad"
    assert body["keyword"] is None


def test_calendar_route_bad_timezone(client):
    """Should answer 400 for an unknown time zone."""
    resp = client.get("/analytics/calendar", params={"year": 2025, "month": 6, "tz": "Nowhere/City"})
    assert resp.status_code == 400


def test_month_route_when_unlocked(client):
    """Should return mood shares and daily scores once the month view is unlocked."""
    seed(
        client,
        ("a", "Joy", "2025-01-02T10:00:00Z"),
        ("b", "Joy", "2025-01-03T10:00:00Z"),
        ("c", "Sad", "2025-01-04T10:00:00Z"),
    )
    resp = client.get("/analytics/month", params={"anchor": "2025-01-15"})
    assert resp.status_code == 200
    body = resp.json()

    assert [(s["name"], s["percent_of_month"]) for s in body["shares"]] == [("Joy", 67), ("Sad", 33)]
    assert body["shares"][0]["emoji"] == "🥰"
    assert len(body["daily"]) == 31
    assert body["daily"][1]["average_score"] == 5.0


def test_month_and_year_locked_for_new_profile(client):
    """Should answer 403 while tenure is below the thresholds."""
    now = datetime.now(timezone.utc).isoformat()
    seed(client, ("first ever", "Calm", now))

    assert client.get("/analytics/month").status_code == 403
    assert client.get("/analytics/year").status_code == 403
    assert client.get("/analytics/week").status_code == 200


def test_year_route(client):
    """Should return twelve month buckets with happy counts."""
    seed(
        client,
        ("a", "Joy", "2025-01-02T10:00:00Z"),
        ("b", "Sad", "2025-03-03T10:00:00Z"),
        ("c", "Love", "2025-03-04T10:00:00Z"),
    )
    body = client.get("/analytics/year", params={"anchor": "2025-07-01"}).json()

    assert len(body["buckets"]) == 12
    assert body["buckets"][0]["happy_count"] == 1
    assert body["buckets"][2]["happy_count"] == 1
    assert body["buckets"][2]["total_count"] == 2
    assert body["total"] == 3


def test_unlock_route(client):
    """Should report tenure and the state of every tier."""
    body = client.get("/analytics/unlock").json()

    assert [t["tier"] for t in body] == ["week", "month", "year"]
    assert [t["unlocked"] for t in body] == [True, False, False]
    assert all(t["days_active"] == 0 for t in body)


def test_unknown_profile(client):
    """Should answer 404 for a profile that is not the caller's."""
    resp = client.get("/analytics/week", params={"profile_id": "00000000-0000-0000-0000-000000000000"})
    assert resp.status_code == 404


def test_mood_table(client):
    """Should publish the versioned mood table."""
    body = client.get("/analytics/moods").json()

    assert body["fallback_score"] == 3
    joy = next(m for m in body["moods"] if m["name"] == "Joy")
    assert joy == {"name": "Joy", "score": 5, "emoji": "🥰", "is_happy": True}


def test_calendar_route_blank_mood_keeps_keyword(client):
    """Should ignore a blank mood and search by the keyword instead."""
    seed(client, ("Pizza night!", "Joy", "2025-06-03T19:00:00Z"))
    body = client.get(
        "/analytics/calendar",
        params={"year": 2025, "month": 6, "keyword": "pizza", "mood": "  "},
    ).json()

    assert body["cells"][2]["status"] == "match"
    assert body["mood"] is None
    assert body["keyword"] == "pizza"


def test_invalid_response_is_server_error(client, monkeypatch):
    """Should answer 500, not 400, when a view builds an invalid response."""
    from moodjournal.analytics import routes
    from moodjournal.analytics.schemas import WeekOut

    def broken_view(*args, **kwargs):
        return WeekOut.model_validate({"total": "many"})

    monkeypatch.setattr(routes, "week_view", broken_view)
    resp = client.get("/analytics/week")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to compute analytics"
