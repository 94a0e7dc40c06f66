"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.config import get_settings
from finquest.database import get_session
from finquest.leaderboard.schemas import LeaderboardEntry, LeaderboardResponse
from finquest.leaderboard.service import get_leaderboard

router = APIRouter(prefix="/api/v1", tags=["Leaderboard"])


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    sort: str = Query(default="level"),
    limit: int | None = Query(default=None, ge=1),
    character_id: int | None = Query(default=None),
    db: AsyncSession = Depends(get_session),
):
    """Top characters by level, net_worth, gold (earned) or quests."""
    settings = get_settings()
    limit = min(limit or settings.leaderboard_default_limit, settings.leaderboard_max_limit)
    board = await get_leaderboard(db, sort=sort, limit=limit, character_id=character_id)

    return LeaderboardResponse(
        entries=[
            LeaderboardEntry(
                rank=row["rank"],
                character_id=row["character"].id,
                name=row["character"].name,
                class_name=row["character"].class_name,
                level=row["character"].level,
                xp=row["character"].xp,
                net_worth=row["character"].net_worth,
                gold=row["character"].gold,
                total_quests_completed=row["character"].total_quests_completed,
                total_gold_earned=row["character"].total_gold_earned,
                achievement_count=row["achievement_count"],
            )
            for row in board["entries"]
        ],
        my_rank=board["my_rank"],
        sort=board["sort"],
    )
