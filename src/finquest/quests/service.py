"""Quest catalogue, acceptance and submission.

Submission is the main progression path: grade, scale rewards, fold them into
the character, then evaluate achievements, all inside the caller's
transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.service import check_and_award_achievements
from finquest.activity.service import record_activity
from finquest.characters.service import get_character
from finquest.db.models import Achievement, Character, Quest, QuestCategory, QuestProgress
from finquest.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from finquest.progression.applier import apply_progression, merge_level_ups
from finquest.progression.leveling import LevelUpResult
from finquest.progression.quest_scoring import ScoreResult, answer_feedback, score_quest
from finquest.progression.rewards import Difficulty, Rewards, calculate_rewards

logger = structlog.get_logger()

ACTIVE_STATUSES = frozenset({"accepted", "in_progress"})
FINISHED_STATUSES = frozenset({"completed", "failed"})


@dataclass
class QuestSubmission:
    progress: QuestProgress
    character: Character
    score: ScoreResult
    rewards: Rewards
    status: str
    feedback: list[dict[str, Any]]
    level_up: LevelUpResult | None = None
    unlocked: list[Achievement] = field(default_factory=list)


async def get_quest(db: AsyncSession, quest_id: int) -> Quest:
    result = await db.execute(select(Quest).where(Quest.id == quest_id, Quest.is_active.is_(True)))
    quest = result.scalar_one_or_none()
    if quest is None:
        raise NotFoundError(f"Quest {quest_id} not found")
    return quest


async def get_progress(db: AsyncSession, character_id: int, quest_id: int) -> QuestProgress | None:
    result = await db.execute(
        select(QuestProgress).where(
            QuestProgress.character_id == character_id,
            QuestProgress.quest_id == quest_id,
        )
    )
    return result.scalar_one_or_none()


async def list_quests(
    db: AsyncSession,
    character_id: int | None = None,
    category: str | None = None,
    difficulty: str | None = None,
) -> list[dict[str, Any]]:
    """Active quests, optionally filtered, with lock flag and progress for a character."""
    stmt = select(Quest).join(QuestCategory, Quest.category_id == QuestCategory.id).where(Quest.is_active.is_(True))
    if category:
        stmt = stmt.where(QuestCategory.name == category)
    if difficulty:
        try:
            Difficulty(difficulty)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown difficulty: {difficulty}") from exc
        stmt = stmt.where(Quest.difficulty == difficulty)
    stmt = stmt.order_by(Quest.order_index, Quest.min_level, Quest.id)

    result = await db.execute(stmt)
    quests = result.scalars().unique().all()

    level: int | None = None
    progress_by_quest: dict[int, QuestProgress] = {}
    if character_id is not None:
        character = await get_character(db, character_id)
        level = character.level
        rows = await db.execute(select(QuestProgress).where(QuestProgress.character_id == character_id))
        progress_by_quest = {p.quest_id: p for p in rows.scalars().all()}

    return [
        {
            "quest": quest,
            "locked": level is not None and quest.min_level > level,
            "progress": progress_by_quest.get(quest.id),
        }
        for quest in quests
    ]


async def list_categories(db: AsyncSession) -> list[tuple[QuestCategory, int]]:
    """Categories with their number of active quests."""
    result = await db.execute(
        select(QuestCategory, func.count(Quest.id))
        .outerjoin(Quest, (Quest.category_id == QuestCategory.id) & Quest.is_active.is_(True))
        .group_by(QuestCategory.id)
        .order_by(QuestCategory.id)
    )
    return [(category, count) for category, count in result]


async def accept_quest(db: AsyncSession, character_id: int, quest_id: int) -> QuestProgress:
    """Accept a quest, or re-accept one that was completed or failed."""
    character = await get_character(db, character_id, for_update=True)
    quest = await get_quest(db, quest_id)

    if character.level < quest.min_level:
        raise ForbiddenError(f"You need to be level {quest.min_level} to accept this quest")

    now = datetime.now(timezone.utc)
    progress = await get_progress(db, character.id, quest.id)
    if progress is None:
        progress = QuestProgress(
            character_id=character.id,
            quest_id=quest.id,
            status="accepted",
            score=0,
            attempts=1,
            answers=[],
            started_at=now,
        )
        db.add(progress)
        try:
            await db.flush()
        except IntegrityError as exc:
            raise ConflictError("Quest already accepted") from exc  # concurrent accept
    elif progress.status in FINISHED_STATUSES:
        progress.status = "accepted"
        progress.score = 0
        progress.answers = []
        progress.started_at = now
        progress.completed_at = None
        progress.attempts += 1
        await db.flush()
    else:
        raise ConflictError("Quest already accepted")

    await record_activity(
        db,
        character.id,
        "quest_accepted",
        f"Accepted quest: {quest.title}",
        metadata={"quest_id": quest.id, "attempt": progress.attempts},
    )
    logger.info("quest_accepted", character_id=character.id, quest_id=quest.id, attempt=progress.attempts)
    return progress


async def start_quest(db: AsyncSession, character_id: int, quest_id: int) -> QuestProgress:
    """Move an accepted quest to in_progress. Starting twice is a no-op."""
    await get_character(db, character_id)
    await get_quest(db, quest_id)

    progress = await get_progress(db, character_id, quest_id)
    if progress is None or progress.status not in ACTIVE_STATUSES:
        raise ConflictError("Quest must be accepted before it can be started")

    if progress.status == "accepted":
        progress.status = "in_progress"
        await db.flush()
    return progress


async def submit_quest(
    db: AsyncSession,
    character_id: int,
    quest_id: int,
    answers: list[int],
) -> QuestSubmission:
    """Grade a submission and apply its rewards.

    Answers are validated before anything is written. A pass banks scaled
    XP/gold/stats and counts toward ``total_quests_completed``; a fail only
    records the attempt.
    """
    character = await get_character(db, character_id, for_update=True)
    quest = await get_quest(db, quest_id)

    questions = quest.questions or []
    score = score_quest(answers, questions)

    progress = await get_progress(db, character.id, quest.id)
    if progress is None or progress.status not in ACTIVE_STATUSES:
        raise ConflictError("Quest is not active; accept it first")

    status = "completed" if score.passed else "failed"
    progress.status = status
    progress.score = score.percentage
    progress.answers = list(answers)
    progress.completed_at = datetime.now(timezone.utc)

    submission = QuestSubmission(
        progress=progress,
        character=character,
        score=score,
        rewards=Rewards(xp=0, gold=Decimal("0.00")),
        status=status,
        feedback=answer_feedback(answers, questions),
    )

    if not score.passed:
        await record_activity(
            db,
            character.id,
            "quest_failed",
            f"Failed quest: {quest.title} ({score.percentage}%)",
            metadata={"quest_id": quest.id, "score": score.percentage},
        )
        await db.flush()
        logger.info("quest_failed", character_id=character.id, quest_id=quest.id, score=score.percentage)
        return submission

    rewards = calculate_rewards(quest, score)
    quest_level_up = apply_progression(character, rewards.xp, rewards.gold, rewards.stat_rewards)
    character.total_quests_completed += 1

    await record_activity(
        db,
        character.id,
        "quest_completed",
        f"Completed quest: {quest.title} ({score.percentage}%)",
        xp_gained=rewards.xp,
        gold_gained=rewards.gold,
        metadata={"quest_id": quest.id, "score": score.percentage, "perfect": rewards.perfect_bonus},
    )
    await db.flush()

    achievements = await check_and_award_achievements(db, character)

    submission.rewards = rewards
    submission.unlocked = achievements.unlocked
    submission.level_up = merge_level_ups(quest_level_up, achievements.level_up)

    logger.info(
        "quest_completed",
        character_id=character.id,
        quest_id=quest.id,
        score=score.percentage,
        xp=rewards.xp,
        gold=str(rewards.gold),
    )
    if submission.level_up is not None:
        logger.info("level_up", character_id=character.id, new_level=character.level, new_class=character.class_name)
    return submission
