"""Leaderboard: characters ranked by level, net worth, gold earned or quests."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.db.models import Character, CharacterAchievement
from finquest.exceptions import InvalidInputError

MAX_LIMIT = 100

SORT_ORDERS = {
    "level": (Character.level.desc(), Character.xp.desc()),
    "net_worth": (Character.net_worth.desc(),),
    "gold": (Character.total_gold_earned.desc(),),
    "quests": (Character.total_quests_completed.desc(),),
}


def _order_by(sort: str) -> tuple:
    try:
        # id breaks ties so ranks are stable between requests
        return (*SORT_ORDERS[sort], Character.id.asc())
    except KeyError as exc:
        raise InvalidInputError(f"Unknown sort: {sort} (expected one of {', '.join(SORT_ORDERS)})") from exc


async def get_leaderboard(
    db: AsyncSession,
    sort: str = "level",
    limit: int = 50,
    character_id: int | None = None,
) -> dict[str, Any]:
    """Top characters for ``sort`` plus the rank of ``character_id`` if given."""
    order_by = _order_by(sort)
    limit = max(1, min(limit, MAX_LIMIT))

    achievement_count = (
        select(func.count())
        .select_from(CharacterAchievement)
        .where(CharacterAchievement.character_id == Character.id)
        .correlate(Character)
        .scalar_subquery()
    )
    rank = func.row_number().over(order_by=order_by)

    result = await db.execute(
        select(Character, achievement_count.label("achievement_count"), rank.label("rank"))
        .order_by(*order_by)
        .limit(limit)
    )
    entries = [
        {
            "rank": row_rank,
            "character": character,
            "achievement_count": count,
        }
        for character, count, row_rank in result
    ]

    my_rank = None
    if character_id is not None:
        ranked = select(Character.id.label("id"), rank.label("rank")).subquery()
        my_rank = (
            await db.execute(select(ranked.c.rank).where(ranked.c.id == character_id))
        ).scalar_one_or_none()

    return {"entries": entries, "my_rank": my_rank, "sort": sort}
