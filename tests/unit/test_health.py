"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


def test_healthz_endpoint(api_app):
    """Test the basic health check endpoint."""
    response = TestClient(api_app).get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_readyz_reports_healthy_storage(api_app):
    response = TestClient(api_app).get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["storage"]["ok"] is True
    assert isinstance(data["checks"]["storage"]["latency_ms"], (int, float))


def test_readyz_storage_unhealthy(api_app, memory_store):
    with patch.object(memory_store, "ping", AsyncMock(return_value=False)):
        response = TestClient(api_app).get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["storage"]["ok"] is False


def test_readyz_storage_raises(api_app, memory_store):
    with patch.object(memory_store, "ping", AsyncMock(side_effect=ConnectionError("refused"))):
        response = TestClient(api_app).get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert "ConnectionError" in data["checks"]["storage"]["error"]
