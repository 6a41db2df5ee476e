"""Health probes — liveness always up, readiness follows the store."""

from tests.fakes import RejectingWritesStore


class _DownStore(RejectingWritesStore):
    async def health_check(self) -> bool:
        return False


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_memory_store(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["store"] == "healthy"


async def test_readiness_reports_unavailable_store(client, runtime):
    runtime.store = _DownStore()
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "store_unavailable"
