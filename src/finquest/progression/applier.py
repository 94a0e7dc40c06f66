"""Progression applier: folds a reward into a character row.

The caller owns the transaction; this only mutates attributes so level, XP,
next-level requirement, class label, gold and stats land in one flush.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from finquest.progression.leveling import LevelUpResult, process_level_up
from finquest.progression.rewards import STAT_NAMES


def apply_progression(
    character: Any,
    xp: int,
    gold: Decimal = Decimal("0"),
    stat_rewards: dict[str, int] | None = None,
) -> LevelUpResult:
    """Bank ``xp``, roll it through the leveling curve and apply gold/stat deltas."""
    result = process_level_up(character.xp + xp, character.level)

    character.level = result.new_level
    character.xp = result.remaining_xp
    character.xp_to_next_level = result.xp_to_next_level
    character.class_name = result.new_class

    if gold:
        character.gold = Decimal(str(character.gold)) + gold
        character.total_gold_earned = Decimal(str(character.total_gold_earned)) + gold

    for stat, delta in (stat_rewards or {}).items():
        if stat in STAT_NAMES:
            setattr(character, stat, getattr(character, stat) + delta)

    character.updated_at = datetime.now(timezone.utc)
    return result


def merge_level_ups(*results: LevelUpResult | None) -> LevelUpResult | None:
    """Combine consecutive applier passes into one result, or None if nothing leveled."""
    passes = [r for r in results if r is not None]
    if not passes:
        return None
    level_ups = [event for r in passes for event in r.level_ups]
    if not level_ups:
        return None
    last = passes[-1]
    return LevelUpResult(
        new_level=last.new_level,
        remaining_xp=last.remaining_xp,
        xp_to_next_level=last.xp_to_next_level,
        new_class=last.new_class,
        level_ups=level_ups,
    )
