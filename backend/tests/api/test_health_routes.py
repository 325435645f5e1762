"""Health and readiness endpoints."""

import app.infrastructure.database as database


class FakeManager:
    def __init__(self, healthy: bool):
        self.healthy = healthy

    async def health_check(self) -> bool:
        return self.healthy


async def test_liveness(client):
    r = await client.get("/api/health/")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "service": "portfolio-api", "version": "1.0.0"}


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    r = await client.get("/api/health/ready")
    assert r.status_code == 503
    assert r.json()["reason"] == "database_unavailable"


async def test_readiness_with_unhealthy_database_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", FakeManager(False))
    assert (await client.get("/api/health/ready")).status_code == 503


async def test_readiness_with_healthy_database(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", FakeManager(True))
    r = await client.get("/api/health/ready")
    assert r.status_code == 200
    assert r.json()["checks"]["database"] == "healthy"
