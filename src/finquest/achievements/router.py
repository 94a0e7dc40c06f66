"""Achievement endpoints."""

from __future__ import annotations

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.schemas import (
    AchievementCheckResponse,
    AchievementResponse,
    AchievementStatusResponse,
    AllAchievementsResponse,
    CharacterAchievementsResponse,
    UnlockedAchievementResponse,
)
from finquest.achievements.service import check_and_award_achievements, list_achievements, list_unlocked
from finquest.characters.schemas import LevelUpResponse
from finquest.characters.service import get_character
from finquest.database import atomic, get_session
from finquest.dependencies import get_event_redis
from finquest.events import publish_level_ups, publish_unlocks
from finquest.progression.applier import merge_level_ups

router = APIRouter(prefix="/api/v1", tags=["Achievements"])


@router.get("/achievements", response_model=AllAchievementsResponse)
async def all_achievements(
    character_id: int | None = Query(default=None),
    db: AsyncSession = Depends(get_session),
):
    """All achievement definitions, with unlock status when ``character_id`` is given."""
    if character_id is not None:
        await get_character(db, character_id)
    rows = await list_achievements(db, character_id)
    items = [
        AchievementStatusResponse(
            **AchievementResponse.model_validate(row["achievement"]).model_dump(),
            unlocked=row["unlocked"],
            unlocked_at=row["unlocked_at"],
        )
        for row in rows
    ]
    return AllAchievementsResponse(
        achievements=items,
        total=len(items),
        unlocked=sum(1 for i in items if i.unlocked),
    )


@router.get("/characters/{character_id}/achievements", response_model=CharacterAchievementsResponse)
async def character_achievements(character_id: int, db: AsyncSession = Depends(get_session)):
    """Achievements the character has unlocked, newest first."""
    await get_character(db, character_id)
    unlocked = await list_unlocked(db, character_id)
    return CharacterAchievementsResponse(
        achievements=[
            UnlockedAchievementResponse(
                achievement=AchievementResponse.model_validate(ca.achievement),
                unlocked_at=ca.unlocked_at,
            )
            for ca in unlocked
        ],
        total_unlocked=len(unlocked),
    )


@router.post("/characters/{character_id}/achievements/check", response_model=AchievementCheckResponse)
async def check_achievements(
    character_id: int,
    db: AsyncSession = Depends(get_session),
    redis_client: redis.Redis | None = Depends(get_event_redis),
):
    """Evaluate all unearned achievements now. Already-unlocked ones are never awarded twice."""
    async with atomic(db):
        character = await get_character(db, character_id, for_update=True)
        result = await check_and_award_achievements(db, character)

    await publish_unlocks(redis_client, character.id, result.unlocked)
    if result.level_up is not None:
        await publish_level_ups(redis_client, character.id, result.level_up.level_ups)

    return AchievementCheckResponse(
        unlocked=[AchievementResponse.model_validate(a) for a in result.unlocked],
        xp_bonus=result.xp_bonus,
        gold_bonus=result.gold_bonus,
        level_up=LevelUpResponse.from_result(merge_level_ups(result.level_up)),
    )
