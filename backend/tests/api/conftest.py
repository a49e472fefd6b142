"""API-specific test fixtures."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def api_client(settings, gateway, notifier, storage):
    """FastAPI test client backed by a fresh SQLite database.

    The app's own lifespan runs inside the TestClient's event loop, so
    init_db() binds the engine there and route handlers can use
    get_session_factory(). Collaborators are the fakes from the root
    conftest; tests inspect them through the same fixtures.
    """
    from club_api.main import create_app

    app = create_app(settings, gateway=gateway, notifier=notifier, storage=storage)

    with TestClient(app) as client:
        yield client


@pytest.fixture
def create_merch(api_client):
    """Create a merch item through the API and return its data."""

    def _create(**overrides) -> dict:
        body = {
            "name": "Club Tee",
            "description": "Cotton tee",
            "sizes": ["M", "L"],
            "colors": ["Black"],
            "price": 10.0,
            "quantity": 5,
        }
        body.update(overrides)
        response = api_client.post("/api/merch", json=body)
        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True, payload
        return payload["data"]

    return _create
