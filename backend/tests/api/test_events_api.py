"""Tests for the event listing endpoints."""

import pytest

pytestmark = pytest.mark.integration


def _event(**overrides) -> dict:
    body = {
        "name": "Hackathon",
        "description": "24 hours of building",
        "start_date": "2026-03-01T09:00:00Z",
        "end_date": "2026-03-02T09:00:00Z",
        "time": "9am - 9am",
        "photo_url": "https://cdn.example.test/uploads/hack.png",
    }
    body.update(overrides)
    return body


def test_create_event_returns_record(api_client):
    response = api_client.post("/api/event", json=_event())

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Event created successfully"
    assert payload["data"]["name"] == "Hackathon"
    assert payload["data"]["id"]


def test_duplicate_event_name_rejected(api_client):
    api_client.post("/api/event", json=_event())

    response = api_client.post("/api/event", json=_event(description="again"))

    payload = response.json()
    assert response.status_code == 200
    assert payload["success"] is False
    assert payload["message"] == "Event Name already exists"

    listing = api_client.get("/api/event").json()
    assert len(listing["data"]) == 1


def test_end_before_start_is_validation_error(api_client):
    response = api_client.post(
        "/api/event",
        json=_event(start_date="2026-03-02T09:00:00Z", end_date="2026-03-01T09:00:00Z"),
    )
    assert response.status_code == 422


def test_list_events_empty(api_client):
    payload = api_client.get("/api/event").json()

    assert payload["success"] is False
    assert payload["message"] == "No events found"
    assert payload["data"] is None


def test_list_events_ordered_by_start_date(api_client):
    api_client.post("/api/event", json=_event(name="Later", start_date="2026-05-01T00:00:00Z", end_date="2026-05-01T00:00:00Z"))
    api_client.post("/api/event", json=_event(name="Sooner", start_date="2026-04-01T00:00:00Z", end_date="2026-04-01T00:00:00Z"))

    payload = api_client.get("/api/event").json()

    assert payload["success"] is True
    assert payload["message"] == "Events found"
    assert [e["name"] for e in payload["data"]] == ["Sooner", "Later"]


def test_update_event_renames(api_client):
    created = api_client.post("/api/event", json=_event()).json()["data"]

    response = api_client.put(f"/api/event/{created['id']}", json={"name": "Hack & Roll"})

    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Event updated successfully"
    assert payload["data"]["name"] == "Hack & Roll"
    assert payload["data"]["description"] == "24 hours of building"


def test_update_event_to_taken_name_rejected(api_client):
    api_client.post("/api/event", json=_event(name="Orientation"))
    created = api_client.post("/api/event", json=_event()).json()["data"]

    payload = api_client.put(f"/api/event/{created['id']}", json={"name": "Orientation"}).json()

    assert payload["success"] is False
    assert payload["message"] == "Event Name already exists"


def test_update_event_keeping_own_name_allowed(api_client):
    created = api_client.post("/api/event", json=_event()).json()["data"]

    payload = api_client.put(
        f"/api/event/{created['id']}", json={"name": "Hackathon", "time": "10am"}
    ).json()

    assert payload["success"] is True
    assert payload["data"]["time"] == "10am"


def test_update_unknown_event(api_client):
    payload = api_client.put("/api/event/does-not-exist", json={"name": "x"}).json()

    assert payload["success"] is False
    assert payload["message"] == "No such event exists"


def test_delete_event(api_client):
    created = api_client.post("/api/event", json=_event()).json()["data"]

    payload = api_client.delete(f"/api/event/{created['id']}").json()
    assert payload["success"] is True
    assert payload["message"] == "Event deleted successfully"

    again = api_client.delete(f"/api/event/{created['id']}").json()
    assert again["success"] is False
    assert again["message"] == "No such event exists"


def test_delete_unknown_id_leaves_events_unchanged(api_client):
    created = api_client.post("/api/event", json=_event()).json()["data"]
    before = api_client.get("/api/event").json()["data"]

    payload = api_client.delete("/api/event/does-not-exist").json()

    assert payload["success"] is False
    assert payload["message"] == "No such event exists"
    after = api_client.get("/api/event").json()["data"]
    assert after == before
    assert [e["id"] for e in after] == [created["id"]]
