"""Tests for ringcatalog.web.routes.health - Health check route."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ringcatalog.web.routes import health


@pytest.fixture
def client():
    """Create test client with only the health router."""
    test_app = FastAPI()
    test_app.include_router(health.router)
    return TestClient(test_app)


class TestHealthCheck:
    """Tests for GET /api/health."""

    def test_healthy_catalog(self, client, monkeypatch, catalog_file):
        monkeypatch.setenv("CATALOG_PATH", str(catalog_file))
        monkeypatch.setenv("METALPRICE_API_KEY", "secret")

        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "ringcatalog"
        assert data["catalog"]["readable"] is True
        assert data["catalog"]["products"] == 3
        assert data["catalog"]["rejected"] == 0
        assert data["oracle"] == {"api_key_configured": True}

    def test_unreadable_catalog_reported(self, client, monkeypatch, tmp_path):
        monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "missing.json"))

        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["catalog"]["readable"] is False
        assert "detail" in data["catalog"]
        assert data["oracle"]["api_key_configured"] is False

    def test_rejected_records_counted(self, client, monkeypatch, write_catalog, ring_a_record):
        monkeypatch.setenv("CATALOG_PATH", str(write_catalog([ring_a_record, {"name": "Broken"}])))

        data = client.get("/api/health").json()

        assert data["catalog"]["products"] == 1
        assert data["catalog"]["rejected"] == 1

    def test_api_key_never_echoed(self, client, monkeypatch, catalog_file):
        monkeypatch.setenv("CATALOG_PATH", str(catalog_file))
        monkeypatch.setenv("METALPRICE_API_KEY", "super-secret-key")

        response = client.get("/api/health")

        assert "super-secret-key" not in response.text
