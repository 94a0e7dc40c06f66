"""Best-effort publication of progression events over Redis pub/sub.

Events are published only after the owning transaction committed, so a
rolled-back submission never announces a level-up or unlock.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

LEVEL_UP_CHANNEL = "pubsub:level_up"
ACHIEVEMENT_CHANNEL = "pubsub:achievement_unlocked"


async def publish_event(redis: object | None, channel: str, payload: dict[str, Any]) -> None:
    """Publish a JSON payload; failures are logged and never propagate."""
    if redis is None:
        return
    try:
        await redis.publish(channel, json.dumps(payload, default=str))  # type: ignore[union-attr]
    except Exception:
        logger.warning("Failed to publish %s event", channel, exc_info=True)


async def publish_level_ups(redis: object | None, character_id: int, level_ups: list[Any]) -> None:
    for event in level_ups:
        await publish_event(redis, LEVEL_UP_CHANNEL, {
            "character_id": character_id,
            "new_level": event.new_level,
            "new_class": event.new_class,
        })


async def publish_unlocks(redis: object | None, character_id: int, unlocked: list[Any]) -> None:
    for achievement in unlocked:
        await publish_event(redis, ACHIEVEMENT_CHANNEL, {
            "character_id": character_id,
            "slug": achievement.slug,
            "name": achievement.name,
            "rarity": achievement.rarity,
            "xp_bonus": achievement.xp_bonus,
            "gold_bonus": str(achievement.gold_bonus),
        })
