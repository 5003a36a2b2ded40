import datetime
import string

from fastapi.testclient import TestClient

from main import app


def _trip_with_activity(client, trip_payload):
    trip = client.post("/api/trips", json=trip_payload).json()
    day = client.post(f"/api/trips/{trip['id']}/days/generate").json()[0]
    client.post(f"/api/trips/{trip['id']}/days/{day['id']}/activities", json={"title": "Colosseum tour"})
    return trip


def test_create_share_link(client, fake_db, trip_payload):
    trip = _trip_with_activity(client, trip_payload)

    response = client.post(f"/api/share/{trip['id']}")

    assert response.status_code == 200
    link = response.json()
    assert len(link["slug"]) == 10
    assert set(link["slug"]) <= set(string.ascii_lowercase + string.digits)
    assert link["path"] == f"/s/{link['slug']}"
    assert link["expires_at"] is None
    assert fake_db.data["share_links"][link["slug"]]["trip_id"] == trip["id"]
    assert any(e["event_name"] == "share_create" for e in fake_db.data["logs"].values())


def test_shared_itinerary_is_public(client, trip_payload):
    trip = _trip_with_activity(client, trip_payload)
    slug = client.post(f"/api/share/{trip['id']}", json={"expires_in_days": 7}).json()["slug"]

    app.dependency_overrides.clear()
    response = TestClient(app).get(f"/api/share/{slug}")

    assert response.status_code == 200
    itinerary = response.json()
    assert itinerary["trip"]["id"] == trip["id"]
    assert len(itinerary["days"]) == 3
    assert itinerary["days"][0]["activities"][0]["title"] == "Colosseum tour"


def test_expired_link_is_not_found(client, fake_db, trip_payload):
    trip = _trip_with_activity(client, trip_payload)
    slug = client.post(f"/api/share/{trip['id']}").json()["slug"]
    yesterday = datetime.datetime.utcnow() - datetime.timedelta(days=1)
    fake_db.reference(f"share_links/{slug}").update({"expires_at": yesterday.isoformat()})

    response = client.get(f"/api/share/{slug}")

    assert response.status_code == 404
    assert response.json()["detail"] == "This share link is invalid or has expired."


def test_unknown_or_malformed_slug_is_rejected(client):
    assert client.get("/api/share/abc123xyz0").status_code == 404
    assert client.get("/api/share/BAD.slug").status_code == 422


def test_link_to_deleted_trip_is_not_found(client, fake_db, trip_payload):
    trip = _trip_with_activity(client, trip_payload)
    slug = client.post(f"/api/share/{trip['id']}").json()["slug"]
    fake_db.reference(f"trips/{trip['id']}").delete()

    assert client.get(f"/api/share/{slug}").status_code == 404


def test_cannot_share_someone_elses_trip(client, fake_db, trip_payload):
    fake_db.reference("trips/foreign").set({**trip_payload, "owner_id": "user-2"})

    assert client.post("/api/share/foreign").status_code == 403
    assert "share_links" not in fake_db.data
