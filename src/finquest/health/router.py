"""Liveness, readiness and version endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.config import get_settings
from finquest.database import get_session
from finquest.db.models import Achievement, Quest
from finquest.redis_client import get_redis

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: 200 while the process is up."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict[str, object]:
    """Readiness probe: database reachable, content seeded, Redis reachable.

    Redis only carries rate limiting and event fan-out, so a missing Redis
    marks the service degraded rather than unavailable.
    """
    checks: dict[str, object] = {}

    try:
        quests = (await db.execute(select(func.count()).select_from(Quest))).scalar_one()
        achievements = (await db.execute(select(func.count()).select_from(Achievement))).scalar_one()
        checks["database"] = "ok"
        checks["content"] = "ok" if quests and achievements else f"missing: {quests} quests, {achievements} achievements"
    except SQLAlchemyError as exc:
        checks["database"] = f"error: {exc}"

    try:
        await get_redis().ping()
        checks["redis"] = "ok"
    except RuntimeError:
        checks["redis"] = "not configured"
    except Exception as exc:  # noqa: BLE001
        checks["redis"] = f"error: {exc}"

    all_ok = all(v == "ok" for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    """API name, version and environment."""
    settings = get_settings()
    return {
        "name": "finquest",
        "version": settings.app_version,
        "environment": settings.environment,
    }
