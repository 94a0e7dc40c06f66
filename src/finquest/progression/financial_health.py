"""Financial health score (0-100) from a character's financial snapshot.

Four sub-scores, each worth up to 25 points:
  - emergency fund coverage (full marks at 6 months of expenses)
  - debt-to-income (full marks at zero debt, nothing at a ratio of 0.5)
  - credit score (linear over 300-850)
  - savings rate (full marks at 20%)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

MAX_SUBSCORE = 25.0
TARGET_EMERGENCY_MONTHS = 6
CREDIT_SCORE_MIN = 300
CREDIT_SCORE_MAX = 850
TARGET_SAVINGS_RATE = 20


@dataclass(frozen=True)
class FinancialSnapshot:
    income: float
    debt: float
    emergency_fund: float
    monthly_expenses: float
    savings_rate: float
    credit_score: int
    net_worth: float = 0.0
    investments: float = 0.0

    @classmethod
    def from_character(cls, character: Any) -> FinancialSnapshot:
        return cls(
            income=_num(character.income),
            debt=_num(character.debt),
            emergency_fund=_num(character.emergency_fund),
            monthly_expenses=_num(character.monthly_expenses),
            savings_rate=_num(character.savings_rate),
            credit_score=int(character.credit_score),
            net_worth=_num(character.net_worth),
            investments=_num(character.investments),
        )


def _num(value: Decimal | float | int | None) -> float:
    return float(value or 0)


def health_breakdown(snapshot: FinancialSnapshot) -> dict[str, float]:
    """The four capped sub-scores, unrounded."""
    # Denominators floor at 1 so an empty snapshot still scores.
    months_covered = snapshot.emergency_fund / max(snapshot.monthly_expenses, 1)
    debt_to_income = snapshot.debt / max(snapshot.income, 1)
    credit_span = CREDIT_SCORE_MAX - CREDIT_SCORE_MIN

    return {
        "emergency_fund": min(MAX_SUBSCORE, months_covered * (MAX_SUBSCORE / TARGET_EMERGENCY_MONTHS)),
        "debt_to_income": max(0.0, MAX_SUBSCORE - debt_to_income * 50),
        "credit_score": ((snapshot.credit_score - CREDIT_SCORE_MIN) / credit_span) * MAX_SUBSCORE,
        "savings_rate": min(MAX_SUBSCORE, snapshot.savings_rate * (MAX_SUBSCORE / TARGET_SAVINGS_RATE)),
    }


def financial_health(snapshot: FinancialSnapshot) -> int:
    """Composite score, clamped to [0, 100] and rounded half-up."""
    score = sum(health_breakdown(snapshot).values())
    score = min(100.0, max(0.0, score))
    return math.floor(score + 0.5)
