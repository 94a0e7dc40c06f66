"""Request ids, CORS, rate-limit pass-through and JSON error bodies."""

import pytest
from httpx import ASGITransport, AsyncClient

from finquest.main import create_app


class TestRequestId:
    @pytest.mark.asyncio
    async def test_generated_when_missing(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert len(response.headers["x-request-id"]) == 36

    @pytest.mark.asyncio
    async def test_caller_id_echoed(self, client: AsyncClient) -> None:
        response = await client.get("/health", headers={"X-Request-Id": "quest-log-7"})
        assert response.headers["x-request-id"] == "quest-log-7"

    @pytest.mark.asyncio
    async def test_domain_errors_carry_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/characters/999", headers={"X-Request-Id": "lost-hero"})
        assert response.status_code == 404
        assert response.headers["x-request-id"] == "lost-hero"


class TestCrossCutting:
    @pytest.mark.asyncio
    async def test_rate_limiter_passes_through_without_redis(self, client: AsyncClient) -> None:
        for _ in range(5):
            response = await client.get("/version")
            assert response.status_code == 200
        assert "x-ratelimit-limit" not in response.headers

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client: AsyncClient) -> None:
        response = await client.options(
            "/api/v1/quests",
            headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


class TestErrorBodies:
    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/nonexistent-path")
        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"detail": "Not Found"}

    @pytest.mark.asyncio
    async def test_domain_error(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/characters/999")
        assert response.json() == {"detail": "Character 999 not found"}

    @pytest.mark.asyncio
    async def test_validation_error(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/characters", json={"name": "No user"})
        assert response.status_code == 422
        data = response.json()
        assert data["detail"] == "Validation error"
        assert any(err["loc"][-1] == "user_id" for err in data["errors"])

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, database: str) -> None:
        app = create_app()

        @app.get("/explode")
        async def explode() -> None:
            raise RuntimeError("vault door jammed")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/explode")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
