"""Tests for the index swap board endpoints."""

import pytest

pytestmark = pytest.mark.integration


def _swap(**overrides) -> dict:
    body = {
        "student_name": "Alex Tan",
        "module_name": "Data Structures",
        "module_code": "SC1007",
        "have_index": "10234",
        "want_index": "10235",
        "email": "alex@example.com",
        "tele_handle": "@alextan",
    }
    body.update(overrides)
    return body


def test_create_and_list(api_client):
    created = api_client.post("/api/indexSwap", json=_swap()).json()
    assert created["success"] is True
    assert created["message"] == "Index Swap Request created successfully"

    listing = api_client.get("/api/indexSwap").json()
    assert listing["success"] is True
    assert [s["id"] for s in listing["data"]] == [created["data"]["id"]]


def test_same_natural_key_rejected(api_client):
    api_client.post("/api/indexSwap", json=_swap())

    # Contact details are not part of the key
    payload = api_client.post("/api/indexSwap", json=_swap(email="other@example.com")).json()

    assert payload["success"] is False
    assert payload["message"] == "Index Swap request already exists"


def test_different_want_index_allowed(api_client):
    api_client.post("/api/indexSwap", json=_swap())

    payload = api_client.post("/api/indexSwap", json=_swap(want_index="10236")).json()

    assert payload["success"] is True


def test_list_empty(api_client):
    payload = api_client.get("/api/indexSwap").json()

    assert payload["success"] is False
    assert payload["message"] == "No index swap requests found"


def test_update_contact_only(api_client):
    created = api_client.post("/api/indexSwap", json=_swap()).json()["data"]

    payload = api_client.put(
        f"/api/indexSwap/{created['id']}", json={"tele_handle": "@alex_t"}
    ).json()

    assert payload["success"] is True
    assert payload["data"]["tele_handle"] == "@alex_t"


def test_update_into_existing_key_rejected(api_client):
    api_client.post("/api/indexSwap", json=_swap(want_index="10236"))
    created = api_client.post("/api/indexSwap", json=_swap()).json()["data"]

    payload = api_client.put(
        f"/api/indexSwap/{created['id']}", json={"want_index": "10236"}
    ).json()

    assert payload["success"] is False
    assert payload["message"] == "Index Swap request already exists"


def test_update_unknown(api_client):
    payload = api_client.put("/api/indexSwap/missing", json={"want_index": "1"}).json()

    assert payload["success"] is False
    assert payload["message"] == "No such index swap request exists"


def test_delete(api_client):
    created = api_client.post("/api/indexSwap", json=_swap()).json()["data"]

    assert api_client.delete(f"/api/indexSwap/{created['id']}").json()["success"] is True
    assert api_client.delete(f"/api/indexSwap/{created['id']}").json()["success"] is False


def test_delete_unknown_id_leaves_board_unchanged(api_client):
    created = api_client.post("/api/indexSwap", json=_swap()).json()["data"]
    before = api_client.get("/api/indexSwap").json()["data"]

    payload = api_client.delete("/api/indexSwap/does-not-exist").json()

    assert payload["success"] is False
    assert payload["message"] == "No such index swap request exists"
    after = api_client.get("/api/indexSwap").json()["data"]
    assert after == before
    assert [s["id"] for s in after] == [created["id"]]
