"""Character endpoints plus the class tier and level curve reference tables."""

from __future__ import annotations

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.service import check_and_award_achievements
from finquest.activity.service import get_activity_feed
from finquest.characters.schemas import (
    ActivityEntryResponse,
    ActivityFeedResponse,
    CharacterCreateRequest,
    CharacterDetailResponse,
    CharacterRenameRequest,
    CharacterResponse,
    CharacterStatsResponse,
    ClassTierEntry,
    ClassTiersResponse,
    FinancesUpdateRequest,
    FinancialHealthResponse,
    LevelEntry,
    LevelsResponse,
)
from finquest.characters.service import (
    count_achievements,
    create_character,
    get_character,
    get_character_stats,
    rename_character,
    update_finances,
)
from finquest.config import get_settings
from finquest.database import atomic, get_session
from finquest.dependencies import get_event_redis
from finquest.events import publish_level_ups, publish_unlocks
from finquest.progression.class_tiers import CLASS_TIERS
from finquest.progression.financial_health import FinancialSnapshot, financial_health, health_breakdown
from finquest.progression.leveling import MAX_LEVEL, level_table

router = APIRouter(prefix="/api/v1", tags=["Characters"])

RECENT_ACTIVITY_COUNT = 5


async def _detail(db: AsyncSession, character_id: int) -> CharacterDetailResponse:
    character = await get_character(db, character_id)
    snapshot = FinancialSnapshot.from_character(character)
    recent, _total = await get_activity_feed(db, character.id, page=1, per_page=RECENT_ACTIVITY_COUNT)
    return CharacterDetailResponse(
        character=CharacterResponse.model_validate(character),
        financial_health=FinancialHealthResponse(
            score=financial_health(snapshot),
            breakdown={k: round(v, 2) for k, v in health_breakdown(snapshot).items()},
        ),
        achievement_count=await count_achievements(db, character.id),
        recent_activity=[ActivityEntryResponse.model_validate(e) for e in recent],
    )


# ── Reference data ──


@router.get("/classes", response_model=ClassTiersResponse)
async def list_classes():
    """Class tier table, lowest tier first."""
    return ClassTiersResponse(
        classes=[ClassTierEntry(min_level=level, name=name) for level, name in CLASS_TIERS.items()],
    )


@router.get("/levels", response_model=LevelsResponse)
async def list_levels():
    """Level curve: per-level requirement and cumulative XP."""
    return LevelsResponse(levels=[LevelEntry(**row) for row in level_table()], max_level=MAX_LEVEL)


# ── Characters ──


@router.post("/characters", response_model=CharacterDetailResponse, status_code=201)
async def create(body: CharacterCreateRequest, db: AsyncSession = Depends(get_session)):
    """Create the user's character with the starting values."""
    async with atomic(db):
        character = await create_character(db, body.user_id, body.name)
    return await _detail(db, character.id)


@router.get("/characters/{character_id}", response_model=CharacterDetailResponse)
async def read(character_id: int, db: AsyncSession = Depends(get_session)):
    """Character with financial health, achievement count and recent activity."""
    return await _detail(db, character_id)


@router.patch("/characters/{character_id}", response_model=CharacterResponse)
async def rename(character_id: int, body: CharacterRenameRequest, db: AsyncSession = Depends(get_session)):
    async with atomic(db):
        character = await rename_character(db, character_id, body.name)
    return CharacterResponse.model_validate(character)


@router.put("/characters/{character_id}/finances", response_model=CharacterDetailResponse)
async def update_snapshot(
    character_id: int,
    body: FinancesUpdateRequest,
    db: AsyncSession = Depends(get_session),
    redis_client: redis.Redis | None = Depends(get_event_redis),
):
    """Update the financial snapshot, then evaluate wealth achievements."""
    async with atomic(db):
        character = await update_finances(db, character_id, body.model_dump(exclude_none=True))
        check = await check_and_award_achievements(db, character)

    await publish_unlocks(redis_client, character.id, check.unlocked)
    if check.level_up is not None:
        await publish_level_ups(redis_client, character.id, check.level_up.level_ups)
    return await _detail(db, character.id)


@router.get("/characters/{character_id}/stats", response_model=CharacterStatsResponse)
async def stats(character_id: int, db: AsyncSession = Depends(get_session)):
    return CharacterStatsResponse(**await get_character_stats(db, character_id))


@router.get("/characters/{character_id}/activity", response_model=ActivityFeedResponse)
async def activity(
    character_id: int,
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    """Paginated activity feed, newest first."""
    await get_character(db, character_id)
    per_page = per_page or get_settings().activity_feed_page_size
    entries, total = await get_activity_feed(db, character_id, page=page, per_page=per_page)
    return ActivityFeedResponse(
        entries=[ActivityEntryResponse.model_validate(e) for e in entries],
        total=total,
        page=page,
        per_page=per_page,
    )
