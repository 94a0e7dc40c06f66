"""Achievement seed data: definitions upserted on startup."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from finquest.achievements.service import upsert_insert
from finquest.db.models import Achievement

logger = logging.getLogger(__name__)

ACHIEVEMENT_SEED_DATA: list[dict] = [
    # Quest milestones
    {
        "slug": "first_quest",
        "name": "First Steps",
        "description": "Complete your first quest",
        "icon": "\U0001F463",
        "category": "quests",
        "rarity": "common",
        "condition_type": "quests_completed",
        "condition_value": 1,
        "xp_bonus": 25,
        "gold_bonus": 10,
    },
    {
        "slug": "quests_5",
        "name": "Quest Seeker",
        "description": "Complete 5 quests",
        "icon": "\U0001F5FA",
        "category": "quests",
        "rarity": "common",
        "condition_type": "quests_completed",
        "condition_value": 5,
        "xp_bonus": 50,
        "gold_bonus": 25,
    },
    {
        "slug": "quests_25",
        "name": "Seasoned Adventurer",
        "description": "Complete 25 quests",
        "icon": "⚔",
        "category": "quests",
        "rarity": "rare",
        "condition_type": "quests_completed",
        "condition_value": 25,
        "xp_bonus": 150,
        "gold_bonus": 75,
    },
    # Level milestones
    {
        "slug": "level_5",
        "name": "Money Squire",
        "description": "Reach level 5",
        "icon": "⭐",
        "category": "progression",
        "rarity": "common",
        "condition_type": "level",
        "condition_value": 5,
        "xp_bonus": 50,
        "gold_bonus": 25,
    },
    {
        "slug": "level_10",
        "name": "Finance Adept",
        "description": "Reach level 10",
        "icon": "\U0001F31F",
        "category": "progression",
        "rarity": "rare",
        "condition_type": "level",
        "condition_value": 10,
        "xp_bonus": 100,
        "gold_bonus": 50,
    },
    {
        "slug": "level_25",
        "name": "Market Strategist",
        "description": "Reach level 25",
        "icon": "\U0001F4C8",
        "category": "progression",
        "rarity": "epic",
        "condition_type": "level",
        "condition_value": 25,
        "xp_bonus": 250,
        "gold_bonus": 125,
    },
    {
        "slug": "level_50",
        "name": "Financial Grandmaster",
        "description": "Reach the maximum level",
        "icon": "\U0001F451",
        "category": "progression",
        "rarity": "legendary",
        "condition_type": "level",
        "condition_value": 50,
        "xp_bonus": 0,
        "gold_bonus": 1000,
    },
    # Wealth
    {
        "slug": "gold_1000",
        "name": "Gold Hoarder",
        "description": "Earn 1,000 gold in total",
        "icon": "\U0001F4B0",
        "category": "wealth",
        "rarity": "rare",
        "condition_type": "gold",
        "condition_value": 1000,
        "xp_bonus": 100,
        "gold_bonus": 0,
    },
    {
        "slug": "debt_free",
        "name": "Debt Free",
        "description": "Pay off all of your debt",
        "icon": "⛓",
        "category": "wealth",
        "rarity": "epic",
        "condition_type": "zero_debt",
        "condition_value": 0,
        "xp_bonus": 200,
        "gold_bonus": 100,
    },
    {
        "slug": "emergency_ready",
        "name": "Rainy Day Ready",
        "description": "Build an emergency fund of 10,000",
        "icon": "\U0001F6E1",
        "category": "wealth",
        "rarity": "rare",
        "condition_type": "emergency_fund",
        "condition_value": 10000,
        "xp_bonus": 150,
        "gold_bonus": 75,
    },
    {
        "slug": "investor",
        "name": "Investor",
        "description": "Hold 25,000 in investments",
        "icon": "\U0001F4CA",
        "category": "wealth",
        "rarity": "epic",
        "condition_type": "investments",
        "condition_value": 25000,
        "xp_bonus": 200,
        "gold_bonus": 100,
    },
    {
        "slug": "credit_750",
        "name": "Credit Champion",
        "description": "Reach a credit score of 750",
        "icon": "\U0001F4B3",
        "category": "wealth",
        "rarity": "rare",
        "condition_type": "credit_score",
        "condition_value": 750,
        "xp_bonus": 100,
        "gold_bonus": 50,
    },
]


async def seed_achievements(db: AsyncSession) -> int:
    """Upsert all achievement definitions. Returns number of definitions seeded."""
    insert = upsert_insert(db)
    seeded = 0
    for data in ACHIEVEMENT_SEED_DATA:
        stmt = insert(Achievement).values(**data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["slug"],
            set_={
                "name": stmt.excluded.name,
                "description": stmt.excluded.description,
                "icon": stmt.excluded.icon,
                "category": stmt.excluded.category,
                "rarity": stmt.excluded.rarity,
                "condition_type": stmt.excluded.condition_type,
                "condition_value": stmt.excluded.condition_value,
                "xp_bonus": stmt.excluded.xp_bonus,
                "gold_bonus": stmt.excluded.gold_bonus,
            },
        )
        await db.execute(stmt)
        seeded += 1

    await db.commit()
    logger.info("Seeded %d achievement definitions", seeded)
    return seeded
