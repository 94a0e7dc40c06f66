"""Mini-game scores: append-only plays, rewards and per-game bests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.service import check_and_award_achievements
from finquest.activity.service import record_activity
from finquest.characters.service import get_character
from finquest.db.models import Achievement, Character, MiniGameScore
from finquest.exceptions import InvalidInputError
from finquest.progression.applier import apply_progression, merge_level_ups
from finquest.progression.leveling import LevelUpResult
from finquest.progression.rewards import GameType, MiniGameReward, calculate_minigame_reward

logger = structlog.get_logger()

HISTORY_LIMIT = 50


@dataclass
class MiniGameResult:
    play: MiniGameScore
    character: Character
    reward: MiniGameReward
    level_up: LevelUpResult | None = None
    unlocked: list[Achievement] = field(default_factory=list)


def validate_game_type(game_type: str) -> GameType:
    try:
        return GameType(game_type)
    except ValueError as exc:
        known = ", ".join(g.value for g in GameType)
        raise InvalidInputError(f"Unknown game type: {game_type} (expected one of {known})") from exc


async def submit_minigame_score(
    db: AsyncSession,
    character_id: int,
    game_type: str,
    score: int,
    data: dict[str, Any] | None = None,
) -> MiniGameResult:
    """Record one play and bank its reward."""
    game = validate_game_type(game_type)
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidInputError(f"Score must be an integer, got {score!r}")
    character = await get_character(db, character_id, for_update=True)
    reward = calculate_minigame_reward(game.value, score, character.level)

    play = MiniGameScore(
        character_id=character.id,
        game_type=game.value,
        score=score,
        data=data or {},
        xp_awarded=reward.xp,
        gold_awarded=reward.gold,
        played_at=datetime.now(timezone.utc),
    )
    db.add(play)

    game_level_up = apply_progression(character, reward.xp, reward.gold)
    await record_activity(
        db,
        character.id,
        "minigame_played",
        f"Played {game.value.replace('_', ' ')}: scored {score}",
        xp_gained=reward.xp,
        gold_gained=reward.gold,
        metadata={"game_type": game.value, "score": score},
    )
    await db.flush()

    achievements = await check_and_award_achievements(db, character)
    logger.info(
        "minigame_scored",
        character_id=character.id,
        game_type=game.value,
        score=score,
        xp=reward.xp,
        gold=str(reward.gold),
    )
    return MiniGameResult(
        play=play,
        character=character,
        reward=reward,
        level_up=merge_level_ups(game_level_up, achievements.level_up),
        unlocked=achievements.unlocked,
    )


async def get_history(db: AsyncSession, character_id: int, limit: int = HISTORY_LIMIT) -> list[MiniGameScore]:
    await get_character(db, character_id)
    result = await db.execute(
        select(MiniGameScore)
        .where(MiniGameScore.character_id == character_id)
        .order_by(MiniGameScore.played_at.desc(), MiniGameScore.id.desc())
        .limit(min(limit, HISTORY_LIMIT))
    )
    return list(result.scalars().all())


async def get_best_scores(db: AsyncSession, character_id: int) -> list[dict[str, Any]]:
    """Best score and play count per game type."""
    await get_character(db, character_id)
    rows = await db.execute(
        select(MiniGameScore.game_type, func.max(MiniGameScore.score), func.count())
        .where(MiniGameScore.character_id == character_id)
        .group_by(MiniGameScore.game_type)
        .order_by(MiniGameScore.game_type)
    )
    return [
        {"game_type": game_type, "best_score": best, "times_played": plays}
        for game_type, best, plays in rows
    ]
