"""Tests for health endpoints."""


class TestHealth:
    async def test_root(self, api_client):
        response = await api_client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    async def test_root_health(self, api_client):
        response = await api_client.get("/health")
        assert response.json()["status"] == "healthy"

    async def test_api_health(self, api_client):
        response = await api_client.get("/api/health")
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime_seconds"] >= 0

    async def test_db_health(self, api_client):
        response = await api_client.get("/api/health/db")
        data = response.json()
        assert data["database"]["name"] == "sqlite"
        assert data["database"]["available"] is True

    async def test_request_id_header(self, api_client):
        response = await api_client.get("/health")
        assert "X-Request-ID" in response.headers
