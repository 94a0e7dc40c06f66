"""Achievement unlocks with duplicate prevention and bonus rewards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.activity.service import record_activity
from finquest.db.models import Achievement, Character, CharacterAchievement
from finquest.progression.achievements import CharacterState, evaluate_achievements
from finquest.progression.applier import apply_progression
from finquest.progression.leveling import LevelUpResult

logger = structlog.get_logger()


@dataclass
class AchievementCheckResult:
    unlocked: list[Achievement]
    xp_bonus: int
    gold_bonus: Decimal
    level_up: LevelUpResult | None


def upsert_insert(db: AsyncSession) -> Any:
    """Dialect-specific INSERT supporting ON CONFLICT (PostgreSQL or SQLite)."""
    if db.get_bind().dialect.name == "sqlite":
        return sqlite_insert
    return pg_insert


async def get_unearned(db: AsyncSession, character_id: int) -> list[Achievement]:
    """Achievement definitions the character has not unlocked yet."""
    unlocked = select(CharacterAchievement.achievement_id).where(
        CharacterAchievement.character_id == character_id
    )
    result = await db.execute(
        select(Achievement).where(Achievement.id.not_in(unlocked)).order_by(Achievement.id)
    )
    return list(result.scalars().all())


async def unlock(db: AsyncSession, character_id: int, achievement: Achievement) -> bool:
    """Insert the unlock row. Returns False if it already existed (duplicate or race)."""
    insert = upsert_insert(db)
    stmt = (
        insert(CharacterAchievement)
        .values(
            character_id=character_id,
            achievement_id=achievement.id,
            unlocked_at=datetime.now(timezone.utc),
        )
        .on_conflict_do_nothing(index_elements=["character_id", "achievement_id"])
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def check_and_award_achievements(db: AsyncSession, character: Character) -> AchievementCheckResult:
    """Unlock every unearned achievement whose condition holds for ``character``.

    Runs inside the caller's transaction. Conditions are evaluated once against
    the current state; the summed XP/gold bonus of everything unlocked goes
    through one applier pass so XP never sits above the level requirement.
    """
    unearned = await get_unearned(db, character.id)
    qualifying = evaluate_achievements(CharacterState.from_character(character), unearned)

    unlocked: list[Achievement] = []
    for achievement in qualifying:
        if not await unlock(db, character.id, achievement):
            continue
        unlocked.append(achievement)
        await record_activity(
            db,
            character.id,
            "achievement_unlocked",
            f"Achievement Unlocked: {achievement.name}",
            xp_gained=achievement.xp_bonus,
            gold_gained=Decimal(str(achievement.gold_bonus)),
            metadata={"slug": achievement.slug, "rarity": achievement.rarity},
        )
        logger.info(
            "achievement_unlocked",
            character_id=character.id,
            slug=achievement.slug,
            xp_bonus=achievement.xp_bonus,
        )

    xp_bonus = sum(a.xp_bonus for a in unlocked)
    gold_bonus = sum((Decimal(str(a.gold_bonus)) for a in unlocked), Decimal("0"))

    level_up = None
    if xp_bonus or gold_bonus:
        level_up = apply_progression(character, xp_bonus, gold_bonus)
        await db.flush()

    return AchievementCheckResult(
        unlocked=unlocked,
        xp_bonus=xp_bonus,
        gold_bonus=gold_bonus,
        level_up=level_up,
    )


async def list_achievements(db: AsyncSession, character_id: int | None = None) -> list[dict[str, Any]]:
    """All definitions with unlock status for ``character_id`` (if given)."""
    result = await db.execute(
        select(Achievement).order_by(Achievement.category, Achievement.condition_value, Achievement.id)
    )
    achievements = result.scalars().all()

    unlocked_at: dict[int, datetime] = {}
    if character_id is not None:
        rows = await db.execute(
            select(CharacterAchievement.achievement_id, CharacterAchievement.unlocked_at).where(
                CharacterAchievement.character_id == character_id
            )
        )
        unlocked_at = {achievement_id: when for achievement_id, when in rows}

    return [
        {
            "achievement": a,
            "unlocked": a.id in unlocked_at,
            "unlocked_at": unlocked_at.get(a.id),
        }
        for a in achievements
    ]


async def list_unlocked(db: AsyncSession, character_id: int) -> list[CharacterAchievement]:
    result = await db.execute(
        select(CharacterAchievement)
        .where(CharacterAchievement.character_id == character_id)
        .order_by(CharacterAchievement.unlocked_at.desc(), CharacterAchievement.id.desc())
    )
    return list(result.scalars().unique().all())
