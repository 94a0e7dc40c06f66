"""Pydantic models for achievement endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from finquest.characters.schemas import LevelUpResponse


class AchievementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    name: str
    description: str
    icon: str | None = None
    category: str
    rarity: str
    condition_type: str
    condition_value: int
    xp_bonus: int
    gold_bonus: Decimal


class AchievementStatusResponse(AchievementResponse):
    unlocked: bool = False
    unlocked_at: datetime | None = None


class AllAchievementsResponse(BaseModel):
    achievements: list[AchievementStatusResponse]
    total: int
    unlocked: int


class UnlockedAchievementResponse(BaseModel):
    achievement: AchievementResponse
    unlocked_at: datetime


class CharacterAchievementsResponse(BaseModel):
    achievements: list[UnlockedAchievementResponse]
    total_unlocked: int


class AchievementCheckResponse(BaseModel):
    unlocked: list[AchievementResponse]
    xp_bonus: int
    gold_bonus: Decimal
    level_up: LevelUpResponse | None = None
