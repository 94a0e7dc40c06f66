"""Pydantic models for mini-game endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from finquest.achievements.schemas import AchievementResponse
from finquest.characters.schemas import CharacterResponse, LevelUpResponse


class MiniGameScoreRequest(BaseModel):
    game_type: str
    score: int
    data: dict[str, Any] = Field(default_factory=dict)


class MiniGamePlayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    game_type: str
    score: int
    data: dict[str, Any] = Field(default_factory=dict)
    xp_awarded: int
    gold_awarded: Decimal
    played_at: datetime


class MiniGameScoreResponse(BaseModel):
    play: MiniGamePlayResponse
    xp_earned: int
    gold_earned: Decimal
    level_up: LevelUpResponse | None = None
    unlocked_achievements: list[AchievementResponse]
    character: CharacterResponse


class MiniGameHistoryResponse(BaseModel):
    plays: list[MiniGamePlayResponse]


class BestScoreEntry(BaseModel):
    game_type: str
    best_score: int
    times_played: int


class BestScoresResponse(BaseModel):
    best_scores: list[BestScoreEntry]
