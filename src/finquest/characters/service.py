"""Character lifecycle, financial snapshot updates and aggregate stats."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.activity.service import record_activity
from finquest.db.models import Achievement, Character, CharacterAchievement, MiniGameScore, QuestProgress
from finquest.exceptions import ConflictError, InvalidInputError, NotFoundError
from finquest.progression.class_tiers import class_for_level
from finquest.progression.leveling import xp_to_next_level

logger = structlog.get_logger()

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 64

STARTING_VALUES: dict[str, Any] = {
    "level": 1,
    "xp": 0,
    "gold": Decimal("500.00"),
    "wisdom": 1,
    "discipline": 1,
    "risk_tolerance": 1,
    "negotiation": 1,
    "income": Decimal("2000.00"),
    "net_worth": Decimal("0.00"),
    "debt": Decimal("1000.00"),
    "emergency_fund": Decimal("0.00"),
    "investments": Decimal("0.00"),
    "monthly_expenses": Decimal("1500.00"),
    "savings_rate": Decimal("5.00"),
    "credit_score": 650,
    "total_quests_completed": 0,
    "total_gold_earned": Decimal("0.00"),
}

# Numeric(12, 2) columns hold at most this magnitude.
MAX_AMOUNT = Decimal("9999999999.99")

# Snapshot field -> (min, max).
FINANCE_BOUNDS: dict[str, tuple[Decimal | int, Decimal | int]] = {
    "income": (Decimal("0"), MAX_AMOUNT),
    "net_worth": (-MAX_AMOUNT, MAX_AMOUNT),
    "debt": (Decimal("0"), MAX_AMOUNT),
    "emergency_fund": (Decimal("0"), MAX_AMOUNT),
    "investments": (Decimal("0"), MAX_AMOUNT),
    "monthly_expenses": (Decimal("0"), MAX_AMOUNT),
    "savings_rate": (Decimal("0"), Decimal("100")),
    "credit_score": (300, 850),
}


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if len(cleaned) < NAME_MIN_LENGTH:
        raise InvalidInputError(f"Character name must be at least {NAME_MIN_LENGTH} characters")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise InvalidInputError(f"Character name must be at most {NAME_MAX_LENGTH} characters")
    return cleaned


async def get_character(db: AsyncSession, character_id: int, for_update: bool = False) -> Character:
    """Get a character by ID. Mutating callers lock the row for the transaction."""
    stmt = select(Character).where(Character.id == character_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await db.execute(stmt)
    character = result.scalar_one_or_none()
    if character is None:
        raise NotFoundError(f"Character {character_id} not found")
    return character


async def get_character_by_user(db: AsyncSession, user_id: int) -> Character | None:
    result = await db.execute(select(Character).where(Character.user_id == user_id))
    return result.scalar_one_or_none()


async def create_character(db: AsyncSession, user_id: int, name: str) -> Character:
    """Create the user's one character with the fixed starting values."""
    cleaned = _clean_name(name)

    if await get_character_by_user(db, user_id) is not None:
        raise ConflictError("You already have a character")

    now = datetime.now(timezone.utc)
    character = Character(
        user_id=user_id,
        name=cleaned,
        xp_to_next_level=xp_to_next_level(1),
        class_name=class_for_level(1),
        created_at=now,
        updated_at=now,
        **STARTING_VALUES,
    )
    db.add(character)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictError("You already have a character") from exc  # concurrent create

    await record_activity(
        db, character.id, "character_created", f'Created character "{character.name}"'
    )
    logger.info("character_created", character_id=character.id, user_id=user_id)
    return character


async def rename_character(db: AsyncSession, character_id: int, name: str) -> Character:
    cleaned = _clean_name(name)
    character = await get_character(db, character_id, for_update=True)
    character.name = cleaned
    character.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return character


def validate_finances(changes: dict[str, Any]) -> dict[str, Any]:
    """Range-check snapshot updates. Unknown fields are rejected."""
    cleaned: dict[str, Any] = {}
    for field, value in changes.items():
        if value is None:
            continue
        if field not in FINANCE_BOUNDS:
            raise InvalidInputError(f"Unknown financial field: {field}")
        low, high = FINANCE_BOUNDS[field]
        try:
            value = int(value) if field == "credit_score" else Decimal(str(value))
            in_range = low <= value <= high
        except (ArithmeticError, ValueError) as exc:
            raise InvalidInputError(f"{field} is not a valid amount: {value}") from exc
        if not in_range:
            raise InvalidInputError(f"{field} must be between {low} and {high}, got {value}")
        cleaned[field] = value if field == "credit_score" else value.quantize(Decimal("0.01"))
    return cleaned


async def update_finances(db: AsyncSession, character_id: int, changes: dict[str, Any]) -> Character:
    """Apply a validated financial snapshot update and log it.

    Achievement evaluation is left to the caller so it shares the transaction.
    """
    cleaned = validate_finances(changes)
    character = await get_character(db, character_id, for_update=True)

    for field, value in cleaned.items():
        setattr(character, field, value)
    character.updated_at = datetime.now(timezone.utc)

    if cleaned:
        await record_activity(
            db,
            character.id,
            "finances_updated",
            "Updated financial snapshot: " + ", ".join(sorted(cleaned)),
            metadata={k: str(v) for k, v in cleaned.items()},
        )
    await db.flush()
    return character


async def count_achievements(db: AsyncSession, character_id: int) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(CharacterAchievement)
        .where(CharacterAchievement.character_id == character_id)
    )
    return result.scalar_one()


async def get_character_stats(db: AsyncSession, character_id: int) -> dict[str, Any]:
    """Quest, achievement and mini-game aggregates for the stats page."""
    await get_character(db, character_id)

    progress_rows = await db.execute(
        select(QuestProgress.status, func.count(), func.avg(QuestProgress.score))
        .where(QuestProgress.character_id == character_id)
        .group_by(QuestProgress.status)
    )
    quest_stats: dict[str, Any] = {
        "accepted": 0,
        "in_progress": 0,
        "completed": 0,
        "failed": 0,
        "avg_score": None,
    }
    for status, count, avg_score in progress_rows:
        quest_stats[status] = count
        if status == "completed" and avg_score is not None:
            quest_stats["avg_score"] = round(float(avg_score), 1)

    achievement_rows = await db.execute(
        select(Achievement.category, func.count())
        .join(CharacterAchievement, CharacterAchievement.achievement_id == Achievement.id)
        .where(CharacterAchievement.character_id == character_id)
        .group_by(Achievement.category)
        .order_by(Achievement.category)
    )
    achievement_stats = [
        {"category": category, "count": count} for category, count in achievement_rows
    ]

    minigame_rows = await db.execute(
        select(
            MiniGameScore.game_type,
            func.count(),
            func.max(MiniGameScore.score),
            func.avg(MiniGameScore.score),
        )
        .where(MiniGameScore.character_id == character_id)
        .group_by(MiniGameScore.game_type)
        .order_by(MiniGameScore.game_type)
    )
    minigame_stats = [
        {
            "game_type": game_type,
            "plays": plays,
            "best_score": best,
            "avg_score": round(float(avg), 1) if avg is not None else None,
        }
        for game_type, plays, best, avg in minigame_rows
    ]

    return {
        "quest_stats": quest_stats,
        "achievement_stats": achievement_stats,
        "minigame_stats": minigame_stats,
    }
