"""Pydantic models for character endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Requests ---


class CharacterCreateRequest(BaseModel):
    user_id: int = Field(ge=1)
    name: str = Field(min_length=2, max_length=64)


class CharacterRenameRequest(BaseModel):
    name: str = Field(min_length=2, max_length=64)


class FinancesUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    income: Decimal | None = None
    net_worth: Decimal | None = None
    debt: Decimal | None = None
    emergency_fund: Decimal | None = None
    investments: Decimal | None = None
    monthly_expenses: Decimal | None = None
    savings_rate: Decimal | None = None
    credit_score: int | None = None


# --- Character ---


class CharacterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    level: int
    xp: int
    xp_to_next_level: int
    gold: Decimal
    class_name: str
    wisdom: int
    discipline: int
    risk_tolerance: int
    negotiation: int
    income: Decimal
    net_worth: Decimal
    debt: Decimal
    emergency_fund: Decimal
    investments: Decimal
    monthly_expenses: Decimal
    savings_rate: Decimal
    credit_score: int
    total_quests_completed: int
    total_gold_earned: Decimal
    created_at: datetime
    updated_at: datetime


class FinancialHealthResponse(BaseModel):
    score: int
    breakdown: dict[str, float]


class ActivityEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_type: str
    description: str
    xp_gained: int
    gold_gained: Decimal
    metadata: dict[str, Any] = Field(default_factory=dict, validation_alias="activity_metadata")
    created_at: datetime


class CharacterDetailResponse(BaseModel):
    character: CharacterResponse
    financial_health: FinancialHealthResponse
    achievement_count: int
    recent_activity: list[ActivityEntryResponse]


class ActivityFeedResponse(BaseModel):
    entries: list[ActivityEntryResponse]
    total: int
    page: int
    per_page: int


# --- Stats ---


class QuestStats(BaseModel):
    accepted: int = 0
    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    avg_score: float | None = None


class AchievementCategoryCount(BaseModel):
    category: str
    count: int


class MiniGameStats(BaseModel):
    game_type: str
    plays: int
    best_score: int | None
    avg_score: float | None


class CharacterStatsResponse(BaseModel):
    quest_stats: QuestStats
    achievement_stats: list[AchievementCategoryCount]
    minigame_stats: list[MiniGameStats]


# --- Progression reference data ---


class ClassTierEntry(BaseModel):
    min_level: int
    name: str


class ClassTiersResponse(BaseModel):
    classes: list[ClassTierEntry]


class LevelEntry(BaseModel):
    level: int
    title: str
    xp_required: int
    cumulative: int


class LevelsResponse(BaseModel):
    levels: list[LevelEntry]
    max_level: int


# --- Progression outcomes (shared by quests and mini-games) ---


class LevelUpEventResponse(BaseModel):
    new_level: int
    new_class: str
    xp_to_next: int


class LevelUpResponse(BaseModel):
    new_level: int
    new_class: str
    remaining_xp: int
    xp_to_next_level: int
    level_ups: list[LevelUpEventResponse]

    @classmethod
    def from_result(cls, result: Any) -> LevelUpResponse | None:
        if result is None:
            return None
        return cls(
            new_level=result.new_level,
            new_class=result.new_class,
            remaining_xp=result.remaining_xp,
            xp_to_next_level=result.xp_to_next_level,
            level_ups=[
                LevelUpEventResponse(new_level=e.new_level, new_class=e.new_class, xp_to_next=e.xp_to_next)
                for e in result.level_ups
            ],
        )
