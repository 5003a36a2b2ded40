def _trip(client, trip_payload, **overrides):
    return client.post("/api/trips", json={**trip_payload, **overrides}).json()


def test_preview_runs_rules_without_saving(client, fake_db):
    response = client.post("/api/packing/generate", json={
        "destination": "Cancun Beach", "trip_type": "Leisure", "duration_days": 7,
        "start_date": "2025-06-01", "end_date": "2025-06-07",
    })

    assert response.status_code == 200
    assert list(response.json()) == ["Clothing", "Electronics", "Toiletries", "Documents", "Miscellaneous"]
    assert "packing_lists" not in fake_db.data


def test_generate_for_trip_and_fetch(client, fake_db, trip_payload):
    trip = _trip(client, trip_payload, trip_type="Business")

    created = client.post(f"/api/packing/{trip['id']}")

    assert created.status_code == 200
    assert created.json()["trip_id"] == trip["id"]
    assert list(created.json()["content"])[-1] == "Business Items"

    fetched = client.get(f"/api/packing/{trip['id']}").json()
    assert fetched["content"] == created.json()["content"]
    assert any(e["event_name"] == "packing_list_generate" for e in fake_db.data["logs"].values())


def test_missing_packing_list(client, trip_payload):
    trip = _trip(client, trip_payload)

    assert client.get(f"/api/packing/{trip['id']}").status_code == 404
    assert client.post("/api/packing/no-such-trip").status_code == 404


def test_save_edited_list(client, trip_payload):
    trip = _trip(client, trip_payload)
    content = client.post(f"/api/packing/{trip['id']}").json()["content"]

    content = client.post("/api/packing/edit/add-item",
                          json={"content": content, "category": "Snacks", "item": "Trail mix"}).json()
    content = client.post("/api/packing/edit/remove-item",
                          json={"content": content, "category": "Documents", "index": 0}).json()
    saved = client.put(f"/api/packing/{trip['id']}", json={"content": content})

    assert saved.status_code == 200
    stored = client.get(f"/api/packing/{trip['id']}").json()["content"]
    assert list(stored)[-1] == "Snacks"
    assert stored["Snacks"] == ["Trail mix"]
    assert stored["Documents"] == content["Documents"]


def test_add_category_endpoint(client):
    response = client.post("/api/packing/edit/add-category", json={"content": {"Clothing": ["Socks"]},
                                                                   "category": "Camping"})

    assert response.json() == {"Clothing": ["Socks"], "Camping": []}


def test_cannot_generate_for_someone_elses_trip(client, fake_db, trip_payload):
    fake_db.reference("trips/foreign").set({**trip_payload, "owner_id": "someone-else"})

    response = client.post("/api/packing/foreign")

    assert response.status_code == 403
    assert "packing_lists" not in fake_db.data
