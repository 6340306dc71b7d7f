"""
Tests for the cache debug API.
"""

import pytest
from fastapi.testclient import TestClient

from timeoff_cache.api.app import create_app
from timeoff_cache.config import Settings
from timeoff_cache.services import StoreContext

from .conftest import FakeApiClient, make_notification, make_request


@pytest.fixture
def fake_api():
    return FakeApiClient(
        requests=[make_request("r1")],
        notifications=[make_notification(2), make_notification(1, read=True)],
    )


@pytest.fixture
def client(fake_api):
    """Create a test client whose stores talk to the fake API."""
    config = Settings(cache_ttl=30, unread_refresh_interval=30)
    app = create_app(lambda: StoreContext.create(api=fake_api, config=config))
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Time-off Cache Debug API"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["polling"] is True


def test_cache_info_after_refresh(client, fake_api):
    """Refresh All fills both stores and shows up in cache info."""
    response = client.post("/debug/cache/refresh")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["request_count"] == 1
    assert data["notification_count"] == 2
    assert data["unread_count"] == 1

    response = client.get("/debug/cache")
    assert response.status_code == 200
    data = response.json()
    assert set(data["requests"]["entries"]) == {"requests"}
    assert data["requests"]["entries"]["requests"]["fresh"] is True
    assert "notifications" in data["notifications"]["entries"]
    assert data["notifications"]["ttl_seconds"] == 30


def test_refresh_reports_store_errors(client, fake_api):
    fake_api.fail.add("get_requests")

    response = client.post("/debug/cache/refresh")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["errors"] == ["Failed to fetch requests"]


def test_invalidate_single_key(client):
    client.post("/debug/cache/refresh")

    response = client.delete("/debug/cache/notifications")
    assert response.status_code == 200
    assert response.json()["invalidated"] == ["notifications"]

    entries = client.get("/debug/cache").json()["notifications"]["entries"]
    assert "notifications" not in entries


def test_clear_one_store(client):
    client.post("/debug/cache/refresh")

    response = client.delete("/debug/cache", params={"store": "requests"})
    assert response.status_code == 200
    assert response.json()["invalidated"] == ["requests"]

    data = client.get("/debug/cache").json()
    assert data["requests"]["size"] == 0
    assert data["notifications"]["size"] > 0


def test_clear_unknown_store(client):
    response = client.delete("/debug/cache", params={"store": "users"})
    assert response.status_code == 400


def test_clear_all_stores(client):
    client.post("/debug/cache/refresh")

    response = client.delete("/debug/cache")
    assert response.status_code == 200
    assert {"notifications", "requests"} <= set(response.json()["invalidated"])

    data = client.get("/debug/cache").json()
    assert data["requests"]["size"] == 0
    assert data["notifications"]["size"] == 0


def test_lifespan_configures_logging(fake_api, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "timeoff_cache.api.dependencies.configure_logging",
        lambda *args: calls.append(args),
    )
    config = Settings(cache_ttl=30, unread_refresh_interval=30)
    app = create_app(lambda: StoreContext.create(api=fake_api, config=config))

    with TestClient(app) as test_client:
        assert test_client.get("/health").status_code == 200

    assert len(calls) == 1
