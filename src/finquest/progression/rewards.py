"""Reward formulas for quests and mini-games."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any

from finquest.exceptions import InvalidInputError
from finquest.progression.quest_scoring import ScoreResult

CENTS = Decimal("0.01")
STAT_NAMES = ("wisdom", "discipline", "risk_tolerance", "negotiation")


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class GameType(str, Enum):
    BUDGET_BALANCE = "budget_balance"
    COMPOUND_INTEREST = "compound_interest"
    DEBT_PAYOFF = "debt_payoff"
    INVESTMENT_SIM = "investment_sim"


DIFFICULTY_MULTIPLIERS: MappingProxyType[Difficulty, Decimal] = MappingProxyType({
    Difficulty.BEGINNER: Decimal("1.0"),
    Difficulty.INTERMEDIATE: Decimal("1.25"),
    Difficulty.ADVANCED: Decimal("1.5"),
    Difficulty.EXPERT: Decimal("2.0"),
})

# game type -> (base xp, base gold)
MINIGAME_BASE_REWARDS: MappingProxyType[str, tuple[int, Decimal]] = MappingProxyType({
    GameType.BUDGET_BALANCE.value: (30, Decimal("15")),
    GameType.COMPOUND_INTEREST.value: (40, Decimal("20")),
    GameType.DEBT_PAYOFF.value: (35, Decimal("18")),
    GameType.INVESTMENT_SIM.value: (50, Decimal("25")),
})
DEFAULT_MINIGAME_REWARD: tuple[int, Decimal] = (25, Decimal("12"))

MINIGAME_BASELINE_SCORE = Decimal(50)
MINIGAME_MAX_MULTIPLIER = Decimal(2)


@dataclass(frozen=True)
class Rewards:
    xp: int
    gold: Decimal
    stat_rewards: dict[str, int] = field(default_factory=dict)
    perfect_bonus: bool = False


@dataclass(frozen=True)
class MiniGameReward:
    xp: int
    gold: Decimal


def _to_gold(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def _stat_deltas(stat_rewards: dict[str, Any] | None) -> dict[str, int]:
    return {
        name: int(value)
        for name, value in (stat_rewards or {}).items()
        if name in STAT_NAMES and value
    }


def difficulty_multiplier(difficulty: str) -> Decimal:
    try:
        return DIFFICULTY_MULTIPLIERS[Difficulty(difficulty)]
    except ValueError as exc:
        raise InvalidInputError(f"Unknown difficulty: {difficulty}") from exc


def calculate_rewards(quest: Any, score: ScoreResult) -> Rewards:
    """Scale a quest's base rewards by score and difficulty.

    Stat rewards are only granted on a pass. ``perfect_bonus`` flags a 100%
    run and carries no extra reward.
    """
    multiplier = Decimal(score.percentage) / 100 * difficulty_multiplier(quest.difficulty)

    return Rewards(
        xp=math.floor(Decimal(quest.xp_reward) * multiplier),
        gold=_to_gold(Decimal(str(quest.gold_reward)) * multiplier),
        stat_rewards=_stat_deltas(quest.stat_rewards) if score.passed else {},
        perfect_bonus=score.percentage == 100,
    )


def minigame_multiplier(score: int | float) -> Decimal:
    """Linear in score, 1.0 at 50, capped at 2.0."""
    return min(MINIGAME_MAX_MULTIPLIER, Decimal(str(score)) / MINIGAME_BASELINE_SCORE)


def calculate_minigame_reward(game_type: str, score: int | float, level: int) -> MiniGameReward:
    """Rewards for one mini-game play. ``level`` does not affect the result."""
    if isinstance(score, bool) or not 0 <= score <= 100:
        raise InvalidInputError(f"Score must be between 0 and 100, got {score}")

    base_xp, base_gold = MINIGAME_BASE_REWARDS.get(game_type, DEFAULT_MINIGAME_REWARD)
    multiplier = minigame_multiplier(score)

    return MiniGameReward(
        xp=math.floor(base_xp * multiplier),
        gold=_to_gold(base_gold * multiplier),
    )
