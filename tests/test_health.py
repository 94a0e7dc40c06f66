"""Liveness, readiness and version endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.db.models import Achievement


class TestProbes:
    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_readiness_without_redis(self, client: AsyncClient) -> None:
        """Seeded content is found; the missing Redis pool degrades the status."""
        data = (await client.get("/ready")).json()
        assert data["checks"] == {"database": "ok", "content": "ok", "redis": "not configured"}
        assert data["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_readiness_reports_unseeded_achievements(self, client: AsyncClient, db_session: AsyncSession) -> None:
        await db_session.execute(delete(Achievement))
        await db_session.commit()

        checks = (await client.get("/ready")).json()["checks"]
        assert checks["database"] == "ok"
        assert checks["content"].startswith("missing:")
        assert "0 achievements" in checks["content"]

    @pytest.mark.asyncio
    async def test_version(self, client: AsyncClient) -> None:
        data = (await client.get("/version")).json()
        assert data == {"name": "finquest", "version": "0.1.0", "environment": "development"}
