"""Tests for the health endpoint and the catch-all error handler."""

import logging

from fastapi.testclient import TestClient

from app.database import get_db
from app.main import app


class TestHealth:
    def test_health_needs_no_auth(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["timestamp"]
        assert body["uptime"] >= 0


class TestUnhandledError:
    def test_returns_generic_500_and_logs(self, admin_headers, monkeypatch, caplog):
        def broken_get_db():
            raise RuntimeError("database exploded")

        monkeypatch.setitem(app.dependency_overrides, get_db, broken_get_db)
        client = TestClient(app, raise_server_exceptions=False)

        with caplog.at_level(logging.ERROR, logger="app.main"):
            response = client.get("/api/studios", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "Unhandled error on GET /api/studios" in caplog.text
        assert "database exploded" in caplog.text
