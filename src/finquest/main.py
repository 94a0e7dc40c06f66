"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from finquest.achievements.router import router as achievements_router
from finquest.achievements.seed import seed_achievements
from finquest.characters.router import router as characters_router
from finquest.config import get_settings
from finquest.database import close_db, get_session, init_db
from finquest.health.router import router as health_router
from finquest.leaderboard.router import router as leaderboard_router
from finquest.middleware import setup_middleware
from finquest.minigames.router import router as minigames_router
from finquest.quests.router import router as quests_router
from finquest.quests.seed import seed_quests
from finquest.redis_client import close_redis, init_redis

logger = logging.getLogger(__name__)


async def seed_content() -> None:
    """Upsert quest and achievement content (idempotent)."""
    async for db in get_session():
        await seed_quests(db)
        await seed_achievements(db)
        break


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url, settings.redis_max_connections)

    if settings.seed_content_on_startup:
        try:
            await seed_content()
        except SQLAlchemyError:
            logger.warning("Content seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="FinQuest API",
        description="Backend API for FinQuest, a gamified personal-finance learning game",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(characters_router)
    app.include_router(quests_router)
    app.include_router(minigames_router)
    app.include_router(achievements_router)
    app.include_router(leaderboard_router)

    return app


app = create_app()
