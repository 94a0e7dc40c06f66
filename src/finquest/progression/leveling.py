"""Leveling curve and XP rollover.

Per-level cost is ``floor(100 * 1.15 ** (level - 1))``. Characters bank XP
toward the next level only; crossing a threshold spends the requirement and
increments the level. Level 50 is terminal: XP keeps accumulating there but
never rolls over.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from finquest.exceptions import InvalidInputError
from finquest.progression.class_tiers import class_for_level

BASE_XP = 100
GROWTH_RATE = 1.15
MAX_LEVEL = 50


@dataclass(frozen=True)
class LevelUp:
    """One crossed level, emitted in ascending order."""

    new_level: int
    new_class: str
    xp_to_next: int


@dataclass(frozen=True)
class LevelUpResult:
    new_level: int
    remaining_xp: int
    xp_to_next_level: int
    new_class: str
    level_ups: list[LevelUp] = field(default_factory=list)

    @property
    def leveled_up(self) -> bool:
        return bool(self.level_ups)


def xp_required(level: int) -> int:
    """XP needed to advance from ``level`` to ``level + 1``."""
    if level < 1:
        raise InvalidInputError(f"Level must be >= 1, got {level}")
    return math.floor(BASE_XP * GROWTH_RATE ** (level - 1))


def xp_to_next_level(level: int) -> int:
    """Cached next-level requirement as stored on the character (0 at max level)."""
    return xp_required(level) if level < MAX_LEVEL else 0


def level_from_total_xp(total_xp: int) -> int:
    """Level reached by a character that earned ``total_xp`` from level 1."""
    if total_xp < 0:
        raise InvalidInputError(f"Total XP must be >= 0, got {total_xp}")
    level = 1
    spent = 0
    while level < MAX_LEVEL:
        spent += xp_required(level)
        if total_xp < spent:
            break
        level += 1
    return level


def process_level_up(current_xp: int, current_level: int) -> LevelUpResult:
    """Roll banked XP through the curve, one level at a time.

    Bounded to MAX_LEVEL iterations regardless of the curve parameters.
    """
    if not 1 <= current_level <= MAX_LEVEL:
        raise InvalidInputError(f"Level must be between 1 and {MAX_LEVEL}, got {current_level}")
    if current_xp < 0:
        raise InvalidInputError(f"XP must be >= 0, got {current_xp}")

    level = current_level
    xp = current_xp
    level_ups: list[LevelUp] = []

    for _ in range(MAX_LEVEL):
        if level >= MAX_LEVEL:
            break
        needed = xp_required(level)
        if xp < needed:
            break
        xp -= needed
        level += 1
        level_ups.append(LevelUp(
            new_level=level,
            new_class=class_for_level(level),
            xp_to_next=xp_to_next_level(level),
        ))

    return LevelUpResult(
        new_level=level,
        remaining_xp=xp,
        xp_to_next_level=xp_to_next_level(level),
        new_class=class_for_level(level),
        level_ups=level_ups,
    )


def level_table() -> list[dict]:
    """Every level with its requirement and the cumulative XP to reach it."""
    levels = []
    cumulative = 0
    for level in range(1, MAX_LEVEL + 1):
        levels.append({
            "level": level,
            "title": class_for_level(level),
            "xp_required": xp_to_next_level(level),
            "cumulative": cumulative,
        })
        cumulative += xp_required(level)
    return levels
