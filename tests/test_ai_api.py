import pytest

from schemas.ai_schema import CandidatePlace, Coordinates
from services import ai_service, trip_service

PLACES = [
    CandidatePlace(title="Trevi Fountain", description="A baroque fountain and monument.",
                   coordinates=Coordinates(lat=41.901, lon=12.483)),
    CandidatePlace(title="Campo de' Fiori", description="A square with a morning food market.",
                   coordinates=Coordinates(lat=41.895, lon=12.472)),
]


@pytest.fixture
def lookups(monkeypatch):
    calls = []

    async def fake_lookup(destination, interests, origin_coords=None):
        calls.append((destination, list(interests), origin_coords))
        return list(PLACES)

    monkeypatch.setattr(ai_service, "lookup_places", fake_lookup)
    return calls


@pytest.fixture
def trip_with_days(client, trip_payload):
    trip = client.post("/api/trips", json=trip_payload).json()
    days = client.post(f"/api/trips/{trip['id']}/days/generate").json()
    return trip, days


def _suggestion(n):
    return {"title": f"Visit Place {n}", "category": "Sightseeing", "start_time": "09:00",
            "end_time": "11:00", "duration_minutes": 120, "location": f"Place {n}"}


def test_suggest_for_destination(client, lookups):
    response = client.post("/api/ai/activities", json={
        "destination": "Rome", "interests": ["culture"], "pace": "relaxed", "total_days": 2,
    })

    assert response.status_code == 200
    assert [s["title"] for s in response.json()] == ["Visit Trevi Fountain"]
    assert lookups == [("Rome", ["culture"], None)]


def test_suggest_requires_positive_total_days(client, lookups):
    response = client.post("/api/ai/activities", json={"destination": "Rome", "total_days": 0})

    assert response.status_code == 422


def test_suggest_for_trip_uses_trip_details(client, fake_db, lookups, trip_with_days):
    trip, days = trip_with_days

    response = client.post(f"/api/ai/trips/{trip['id']}/activities", json={
        "interests": ["food"],
        "pace": "busy",
        "target_day_id": days[1]["id"],
        "starting_location": "Pantheon",
        "starting_coords": {"lat": 41.898, "lon": 12.476},
    })

    assert response.status_code == 200
    suggestions = response.json()
    assert [s["category"] for s in suggestions] == ["Dining"]
    assert suggestions[0]["notes"].endswith(" Near Pantheon.")
    assert lookups[0][0] == trip["primary_destination"]

    events = [e for e in fake_db.data["logs"].values() if e["event_name"] == "ai_generate"]
    assert len(events) == 1
    assert events[0]["trip_id"] == trip["id"]
    assert events[0]["metadata"]["pace"] == "busy"

    # Suggestions are not saved until applied.
    assert trip_service.get_activities_for_day(days[1]["id"]) == []


def test_suggest_for_trip_rejects_foreign_day(client, lookups, trip_with_days, trip_payload):
    trip, _ = trip_with_days
    other = client.post("/api/trips", json=trip_payload).json()
    other_day = client.post(f"/api/trips/{other['id']}/days/generate").json()[0]

    response = client.post(f"/api/ai/trips/{trip['id']}/activities",
                           json={"target_day_id": other_day["id"]})

    assert response.status_code == 404
    assert lookups == []


def test_apply_spreads_two_per_day(client, trip_with_days):
    trip, days = trip_with_days

    response = client.post(f"/api/ai/trips/{trip['id']}/activities/apply",
                           json={"suggestions": [_suggestion(n) for n in range(1, 6)]})

    assert response.status_code == 200
    body = response.json()
    assert body["added"] == 5
    assert body["per_day"] == {days[0]["id"]: 2, days[1]["id"]: 2, days[2]["id"]: 1}

    itinerary = client.get(f"/api/trips/{trip['id']}/itinerary").json()
    titles = [[a["title"] for a in day["activities"]] for day in itinerary["days"]]
    assert titles == [
        ["Visit Place 1", "Visit Place 2"],
        ["Visit Place 3", "Visit Place 4"],
        ["Visit Place 5"],
    ]


def test_apply_drops_suggestions_beyond_two_per_day(client, trip_with_days):
    trip, days = trip_with_days

    response = client.post(f"/api/ai/trips/{trip['id']}/activities/apply",
                           json={"suggestions": [_suggestion(n) for n in range(1, 9)]})

    body = response.json()
    assert body["added"] == 6
    assert body["per_day"] == {day["id"]: 2 for day in days}

    itinerary = client.get(f"/api/trips/{trip['id']}/itinerary").json()
    titles = [a["title"] for day in itinerary["days"] for a in day["activities"]]
    assert titles == [f"Visit Place {n}" for n in range(1, 7)]


def test_apply_to_one_day_appends_after_existing(client, trip_with_days):
    trip, days = trip_with_days
    target = days[2]["id"]
    client.post(f"/api/trips/{trip['id']}/days/{target}/activities", json={"title": "Breakfast"})

    response = client.post(f"/api/ai/trips/{trip['id']}/activities/apply", json={
        "suggestions": [_suggestion(n) for n in range(1, 4)],
        "target_day_id": target,
    })

    assert response.json() == {"added": 3, "per_day": {target: 3}}
    activities = trip_service.get_activities_for_day(target)
    assert [a["title"] for a in activities] == ["Breakfast", "Visit Place 1", "Visit Place 2", "Visit Place 3"]
    assert [a["position"] for a in activities] == [0, 1, 2, 3]
    assert trip_service.get_activities_for_day(days[0]["id"]) == []


def test_apply_to_unknown_day_is_not_found(client, trip_with_days):
    trip, _ = trip_with_days

    response = client.post(f"/api/ai/trips/{trip['id']}/activities/apply",
                           json={"suggestions": [_suggestion(1)], "target_day_id": "nope"})

    assert response.status_code == 404


def test_apply_without_days_is_rejected(client, trip_payload):
    trip = client.post("/api/trips", json=trip_payload).json()

    response = client.post(f"/api/ai/trips/{trip['id']}/activities/apply",
                           json={"suggestions": [_suggestion(1)]})

    assert response.status_code == 400
