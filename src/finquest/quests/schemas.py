"""Pydantic models for quest endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict

from finquest.achievements.schemas import AchievementResponse
from finquest.characters.schemas import CharacterResponse, LevelUpResponse


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None


class CategoryWithCountResponse(CategoryResponse):
    quest_count: int = 0


class CategoriesResponse(BaseModel):
    categories: list[CategoryWithCountResponse]


class ProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quest_id: int
    status: str
    score: int
    attempts: int
    started_at: datetime
    completed_at: datetime | None = None


class QuestSummaryResponse(BaseModel):
    id: int
    slug: str
    title: str
    description: str
    difficulty: str
    min_level: int
    xp_reward: int
    gold_reward: Decimal
    stat_rewards: dict[str, int]
    question_count: int
    category: CategoryResponse
    locked: bool = False
    progress: ProgressResponse | None = None


class QuestListResponse(BaseModel):
    quests: list[QuestSummaryResponse]


class QuestionPrompt(BaseModel):
    """A question as shown to the player: no correct index, no explanation."""

    index: int
    question: str
    options: list[str]


class QuestDetailResponse(QuestSummaryResponse):
    questions: list[QuestionPrompt]


class QuestSubmitRequest(BaseModel):
    # Element types are checked by the grader so malformed answers surface as a 400.
    answers: list[Any]


class ScoreResponse(BaseModel):
    correct: int
    total: int
    percentage: int
    passed: bool


class RewardsResponse(BaseModel):
    xp: int
    gold: Decimal
    stat_rewards: dict[str, int]
    perfect_bonus: bool


class AnswerFeedback(BaseModel):
    question: str
    your_answer: int | None
    correct_answer: int | None
    is_correct: bool
    explanation: str | None = None


class QuestSubmitResponse(BaseModel):
    status: str
    score: ScoreResponse
    rewards: RewardsResponse
    level_up: LevelUpResponse | None = None
    unlocked_achievements: list[AchievementResponse]
    feedback: list[AnswerFeedback]
    character: CharacterResponse


class QuestProgressResponse(BaseModel):
    message: str
    progress: ProgressResponse
