"""Mini-game endpoints."""

from __future__ import annotations

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.schemas import AchievementResponse
from finquest.characters.schemas import CharacterResponse, LevelUpResponse
from finquest.config import get_settings
from finquest.database import atomic, get_session
from finquest.dependencies import get_event_redis
from finquest.events import publish_level_ups, publish_unlocks
from finquest.minigames.schemas import (
    BestScoreEntry,
    BestScoresResponse,
    MiniGameHistoryResponse,
    MiniGamePlayResponse,
    MiniGameScoreRequest,
    MiniGameScoreResponse,
)
from finquest.minigames.service import get_best_scores, get_history, submit_minigame_score

router = APIRouter(prefix="/api/v1", tags=["Mini-games"])


@router.post("/characters/{character_id}/minigames/score", response_model=MiniGameScoreResponse)
async def submit_score(
    character_id: int,
    body: MiniGameScoreRequest,
    db: AsyncSession = Depends(get_session),
    redis_client: redis.Redis | None = Depends(get_event_redis),
):
    """Record a play and bank its XP/gold."""
    async with atomic(db):
        result = await submit_minigame_score(db, character_id, body.game_type, body.score, body.data)

    await publish_unlocks(redis_client, character_id, result.unlocked)
    if result.level_up is not None:
        await publish_level_ups(redis_client, character_id, result.level_up.level_ups)

    return MiniGameScoreResponse(
        play=MiniGamePlayResponse.model_validate(result.play),
        xp_earned=result.reward.xp,
        gold_earned=result.reward.gold,
        level_up=LevelUpResponse.from_result(result.level_up),
        unlocked_achievements=[AchievementResponse.model_validate(a) for a in result.unlocked],
        character=CharacterResponse.model_validate(result.character),
    )


@router.get("/characters/{character_id}/minigames/history", response_model=MiniGameHistoryResponse)
async def history(
    character_id: int,
    limit: int | None = Query(default=None, ge=1),
    db: AsyncSession = Depends(get_session),
):
    """Most recent plays, newest first."""
    limit = min(limit or get_settings().minigame_history_limit, get_settings().minigame_history_limit)
    plays = await get_history(db, character_id, limit=limit)
    return MiniGameHistoryResponse(plays=[MiniGamePlayResponse.model_validate(p) for p in plays])


@router.get("/characters/{character_id}/minigames/best", response_model=BestScoresResponse)
async def best_scores(character_id: int, db: AsyncSession = Depends(get_session)):
    rows = await get_best_scores(db, character_id)
    return BestScoresResponse(best_scores=[BestScoreEntry(**row) for row in rows])
