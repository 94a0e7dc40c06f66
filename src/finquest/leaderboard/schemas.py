"""Pydantic models for the leaderboard endpoint."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class LeaderboardEntry(BaseModel):
    rank: int
    character_id: int
    name: str
    class_name: str
    level: int
    xp: int
    net_worth: Decimal
    gold: Decimal
    total_quests_completed: int
    total_gold_earned: Decimal
    achievement_count: int


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry]
    my_rank: int | None = None
    sort: str
