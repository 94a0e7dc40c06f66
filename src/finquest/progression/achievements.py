"""Achievement condition evaluation.

Every condition type has exactly one comparator; the table is checked at
import time so a new ConditionType without a comparator fails loudly instead
of silently never unlocking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar


class ConditionType(str, Enum):
    QUESTS_COMPLETED = "quests_completed"
    LEVEL = "level"
    GOLD = "gold"
    ZERO_DEBT = "zero_debt"
    EMERGENCY_FUND = "emergency_fund"
    INVESTMENTS = "investments"
    CREDIT_SCORE = "credit_score"


@dataclass(frozen=True)
class CharacterState:
    """Aggregate character state the conditions are evaluated against."""

    quests_completed: int
    level: int
    total_gold_earned: Decimal
    debt: Decimal
    emergency_fund: Decimal
    investments: Decimal
    credit_score: int

    @classmethod
    def from_character(cls, character: Any) -> CharacterState:
        return cls(
            quests_completed=character.total_quests_completed,
            level=character.level,
            total_gold_earned=Decimal(str(character.total_gold_earned)),
            debt=Decimal(str(character.debt)),
            emergency_fund=Decimal(str(character.emergency_fund)),
            investments=Decimal(str(character.investments)),
            credit_score=character.credit_score,
        )


Comparator = Callable[[CharacterState, int], bool]

CONDITION_COMPARATORS: dict[ConditionType, Comparator] = {
    ConditionType.QUESTS_COMPLETED: lambda s, threshold: s.quests_completed >= threshold,
    ConditionType.LEVEL: lambda s, threshold: s.level >= threshold,
    ConditionType.GOLD: lambda s, threshold: s.total_gold_earned >= threshold,
    ConditionType.ZERO_DEBT: lambda s, _threshold: s.debt == 0,
    ConditionType.EMERGENCY_FUND: lambda s, threshold: s.emergency_fund >= threshold,
    ConditionType.INVESTMENTS: lambda s, threshold: s.investments >= threshold,
    ConditionType.CREDIT_SCORE: lambda s, threshold: s.credit_score >= threshold,
}

_missing = set(ConditionType) - set(CONDITION_COMPARATORS)
if _missing:
    raise RuntimeError(f"No comparator for condition types: {sorted(m.value for m in _missing)}")


def condition_met(state: CharacterState, condition_type: str, condition_value: int) -> bool:
    """Evaluate one condition. Unknown condition types raise ValueError."""
    comparator = CONDITION_COMPARATORS[ConditionType(condition_type)]
    return comparator(state, condition_value)


T = TypeVar("T")


def evaluate_achievements(state: CharacterState, unearned: Iterable[T]) -> list[T]:
    """Return every unearned definition whose condition now holds.

    Definitions need ``condition_type`` and ``condition_value`` attributes.
    All qualifying definitions are returned, not just the first.
    """
    return [
        definition
        for definition in unearned
        if condition_met(state, definition.condition_type, definition.condition_value)
    ]
