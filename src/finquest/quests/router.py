"""Quest endpoints: catalogue, accept, start and submit."""

from __future__ import annotations

from typing import Any

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.schemas import AchievementResponse
from finquest.characters.schemas import CharacterResponse, LevelUpResponse
from finquest.characters.service import get_character
from finquest.database import atomic, get_session
from finquest.db.models import Quest, QuestProgress
from finquest.dependencies import get_event_redis
from finquest.events import publish_level_ups, publish_unlocks
from finquest.quests.schemas import (
    AnswerFeedback,
    CategoriesResponse,
    CategoryResponse,
    CategoryWithCountResponse,
    ProgressResponse,
    QuestDetailResponse,
    QuestionPrompt,
    QuestListResponse,
    QuestProgressResponse,
    QuestSubmitRequest,
    QuestSubmitResponse,
    QuestSummaryResponse,
    RewardsResponse,
    ScoreResponse,
)
from finquest.quests.service import (
    accept_quest,
    get_progress,
    get_quest,
    list_categories,
    list_quests,
    start_quest,
    submit_quest,
)

router = APIRouter(prefix="/api/v1", tags=["Quests"])


def _summary_fields(quest: Quest, locked: bool = False, progress: QuestProgress | None = None) -> dict[str, Any]:
    return {
        "id": quest.id,
        "slug": quest.slug,
        "title": quest.title,
        "description": quest.description,
        "difficulty": quest.difficulty,
        "min_level": quest.min_level,
        "xp_reward": quest.xp_reward,
        "gold_reward": quest.gold_reward,
        "stat_rewards": quest.stat_rewards or {},
        "question_count": len(quest.questions or []),
        "category": CategoryResponse.model_validate(quest.category),
        "locked": locked,
        "progress": ProgressResponse.model_validate(progress) if progress else None,
    }


@router.get("/quests", response_model=QuestListResponse)
async def quests(
    category: str | None = Query(default=None),
    difficulty: str | None = Query(default=None),
    character_id: int | None = Query(default=None),
    db: AsyncSession = Depends(get_session),
):
    """Active quests. With ``character_id``, each quest carries a lock flag and progress."""
    rows = await list_quests(db, character_id=character_id, category=category, difficulty=difficulty)
    return QuestListResponse(
        quests=[QuestSummaryResponse(**_summary_fields(r["quest"], r["locked"], r["progress"])) for r in rows],
    )


@router.get("/quests/categories", response_model=CategoriesResponse)
async def categories(db: AsyncSession = Depends(get_session)):
    rows = await list_categories(db)
    return CategoriesResponse(
        categories=[
            CategoryWithCountResponse(
                **CategoryResponse.model_validate(category).model_dump(),
                quest_count=count,
            )
            for category, count in rows
        ],
    )


@router.get("/quests/{quest_id}", response_model=QuestDetailResponse)
async def quest_detail(
    quest_id: int,
    character_id: int | None = Query(default=None),
    db: AsyncSession = Depends(get_session),
):
    """Quest with its question prompts. Correct answers are never exposed."""
    quest = await get_quest(db, quest_id)
    locked, progress = False, None
    if character_id is not None:
        character = await get_character(db, character_id)
        locked = character.level < quest.min_level
        progress = await get_progress(db, character.id, quest.id)
    return QuestDetailResponse(
        **_summary_fields(quest, locked=locked, progress=progress),
        questions=[
            QuestionPrompt(index=i, question=q.get("question", ""), options=q.get("options", []))
            for i, q in enumerate(quest.questions or [])
        ],
    )


@router.post("/characters/{character_id}/quests/{quest_id}/accept", response_model=QuestProgressResponse)
async def accept(character_id: int, quest_id: int, db: AsyncSession = Depends(get_session)):
    async with atomic(db):
        progress = await accept_quest(db, character_id, quest_id)
        quest = await get_quest(db, quest_id)
    return QuestProgressResponse(
        message=f'Quest "{quest.title}" accepted!',
        progress=ProgressResponse.model_validate(progress),
    )


@router.post("/characters/{character_id}/quests/{quest_id}/start", response_model=QuestProgressResponse)
async def start(character_id: int, quest_id: int, db: AsyncSession = Depends(get_session)):
    async with atomic(db):
        progress = await start_quest(db, character_id, quest_id)
    return QuestProgressResponse(message="Quest started", progress=ProgressResponse.model_validate(progress))


@router.post("/characters/{character_id}/quests/{quest_id}/submit", response_model=QuestSubmitResponse)
async def submit(
    character_id: int,
    quest_id: int,
    body: QuestSubmitRequest,
    db: AsyncSession = Depends(get_session),
    redis_client: redis.Redis | None = Depends(get_event_redis),
):
    """Grade answers, bank rewards on a pass and unlock any earned achievements."""
    async with atomic(db):
        result = await submit_quest(db, character_id, quest_id, body.answers)

    await publish_unlocks(redis_client, character_id, result.unlocked)
    if result.level_up is not None:
        await publish_level_ups(redis_client, character_id, result.level_up.level_ups)

    return QuestSubmitResponse(
        status=result.status,
        score=ScoreResponse(
            correct=result.score.correct,
            total=result.score.total,
            percentage=result.score.percentage,
            passed=result.score.passed,
        ),
        rewards=RewardsResponse(
            xp=result.rewards.xp,
            gold=result.rewards.gold,
            stat_rewards=result.rewards.stat_rewards,
            perfect_bonus=result.rewards.perfect_bonus,
        ),
        level_up=LevelUpResponse.from_result(result.level_up),
        unlocked_achievements=[AchievementResponse.model_validate(a) for a in result.unlocked],
        feedback=[AnswerFeedback(**f) for f in result.feedback],
        character=CharacterResponse.model_validate(result.character),
    )
