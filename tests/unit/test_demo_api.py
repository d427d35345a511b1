"""Unit tests for the demo API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cicd_pipeline.server.app import create_app
from cicd_pipeline.server.config import ServerSettings


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ServerSettings()))


def test_welcome(client: TestClient) -> None:
    res = client.get("/")

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Welcome to CI/CD Pipeline Example!"
    assert body["version"] == "1.0.0"
    assert body["timestamp"].endswith("Z")


def test_health(client: TestClient) -> None:
    res = client.get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["uptime"] >= 0
    assert "timestamp" in body


def test_users(client: TestClient) -> None:
    res = client.get("/api/users")

    assert res.status_code == 200
    users = res.json()["users"]
    assert len(users) == 2
    for user in users:
        assert set(user) == {"id", "name", "email"}
    assert users[0] == {"id": 1, "name": "John Doe", "email": "john@example.com"}


@pytest.mark.parametrize("path", ["/missing", "/nonexistent", "/api/users/1"])
def test_unknown_route(client: TestClient, path: str) -> None:
    res = client.get(path)

    assert res.status_code == 404
    assert res.json() == {"error": "Route not found", "path": path}


def test_wrong_method_is_route_not_found(client: TestClient) -> None:
    res = client.post("/api/users", json={})

    assert res.status_code == 404
    assert res.json() == {"error": "Route not found", "path": "/api/users"}


def test_version_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_VERSION", "2.3.4")

    res = TestClient(create_app()).get("/")

    assert res.json()["version"] == "2.3.4"
