"""Activity log recording and the per-character feed."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from finquest.db.models import ActivityLog

ACTION_TYPES = frozenset({
    "character_created",
    "quest_accepted",
    "quest_completed",
    "quest_failed",
    "achievement_unlocked",
    "minigame_played",
    "finances_updated",
})


async def record_activity(
    db: AsyncSession,
    character_id: int,
    action_type: str,
    description: str,
    xp_gained: int = 0,
    gold_gained: Decimal = Decimal("0"),
    metadata: dict[str, Any] | None = None,
) -> ActivityLog:
    """Append an entry to the character's activity log."""
    if action_type not in ACTION_TYPES:
        raise ValueError(f"Unknown activity type: {action_type}")

    entry = ActivityLog(
        character_id=character_id,
        action_type=action_type,
        description=description[:256],
        xp_gained=xp_gained,
        gold_gained=gold_gained,
        activity_metadata=metadata or {},
        created_at=datetime.now(timezone.utc),
    )
    db.add(entry)
    await db.flush()
    return entry


async def get_activity_feed(
    db: AsyncSession,
    character_id: int,
    page: int = 1,
    per_page: int = 10,
) -> tuple[list[ActivityLog], int]:
    """Get the character's activity feed, newest first (paginated)."""
    offset = (page - 1) * per_page

    total_result = await db.execute(
        select(func.count()).select_from(ActivityLog).where(ActivityLog.character_id == character_id)
    )
    total = total_result.scalar_one()

    result = await db.execute(
        select(ActivityLog)
        .where(ActivityLog.character_id == character_id)
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .offset(offset)
        .limit(per_page)
    )
    entries = list(result.scalars().all())
    return entries, total
