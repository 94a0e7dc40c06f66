"""Shared test fixtures.

Tests run against a throwaway SQLite file (aiosqlite) with the schema built
from the ORM metadata and content seeded the same way the app does on
startup. Redis is not initialised: rate limiting passes through and event
publication is skipped.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.seed import seed_achievements
from finquest.config import get_settings
from finquest.database import close_db, get_engine, get_session, init_db
from finquest.db.models import Base
from finquest.main import create_app
from finquest.quests.seed import QUEST_SEED_DATA, seed_quests


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[str, None]:
    """Fresh seeded SQLite database per test."""
    fd, path = tempfile.mkstemp(prefix="finquest_test_", suffix=".db")
    os.close(fd)
    url = f"sqlite+aiosqlite:///{path}"

    await init_db(url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async for session in get_session():
        await seed_quests(session)
        await seed_achievements(session)
        break

    yield url

    await close_db()
    os.remove(path)


@pytest_asyncio.fixture
async def client(database: str) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app; the database fixture stands in for the lifespan."""
    get_settings.cache_clear()
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database: str) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for service calls and assertions."""
    async for session in get_session():
        yield session
        break


@pytest_asyncio.fixture
async def character(client: AsyncClient) -> dict:
    """A freshly created level-1 character (API payload)."""
    response = await client.post("/api/v1/characters", json={"user_id": 1, "name": "Penny"})
    assert response.status_code == 201, response.text
    return response.json()["character"]


@pytest.fixture
def find_quest(client: AsyncClient):
    """Look up a seeded quest (API payload) by slug."""

    async def _find(slug: str) -> dict:
        response = await client.get("/api/v1/quests")
        for quest in response.json()["quests"]:
            if quest["slug"] == slug:
                return quest
        raise AssertionError(f"quest {slug} not seeded")

    return _find


def correct_answers(slug: str) -> list[int]:
    """Correct option indices for a seeded quest."""
    for quest in QUEST_SEED_DATA:
        if quest["slug"] == slug:
            return [q["correct"] for q in quest["questions"]]
    raise AssertionError(f"quest {slug} not seeded")


def wrong_answers(slug: str) -> list[int]:
    return [(index + 1) % 4 for index in correct_answers(slug)]


@pytest.fixture
def answers_for():
    """Build an answer list with exactly ``n_correct`` right answers for a seeded quest."""

    def _build(slug: str, n_correct: int) -> list[int]:
        right = correct_answers(slug)
        wrong = wrong_answers(slug)
        return right[:n_correct] + wrong[n_correct:]

    return _build
