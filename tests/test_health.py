import pytest


class TestHealthEndpoint:

    def test_health_check_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["status"] == "healthy"
        assert data["service"] == "NFL Game Predictor API"
        assert data["version"] == "1.0.0"
        assert data["timestamp"].endswith("Z")

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "NFL Game Predictor API"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"
        assert "/predict" in data["endpoints"]

    def test_process_time_header(self, client):
        response = client.get("/health")
        assert "X-Process-Time" in response.headers
