"""ORM models for characters, quests, achievements, mini-games and the activity log.

Column types stay dialect-portable (see ``db.base``): production runs
on PostgreSQL, the test suite on SQLite.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from finquest.db.base import Base, BigIntPK, JSONType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Characters
# ---------------------------------------------------------------------------


class Character(Base):
    """One character per user. Level, XP and class are kept in sync by the progression applier."""

    __tablename__ = "characters"
    __table_args__ = (
        CheckConstraint("level BETWEEN 1 AND 50", name="ck_characters_level_range"),
        CheckConstraint("xp >= 0", name="ck_characters_xp_non_negative"),
        CheckConstraint("gold >= 0", name="ck_characters_gold_non_negative"),
        CheckConstraint("credit_score BETWEEN 300 AND 850", name="ck_characters_credit_score_range"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    # --- Progression ---
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    xp_to_next_level: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    gold: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    class_name: Mapped[str] = mapped_column("class", String(64), nullable=False, default="Financial Apprentice")

    # --- Skill stats ---
    wisdom: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    discipline: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    risk_tolerance: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    negotiation: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # --- Financial snapshot ---
    income: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    net_worth: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    debt: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    emergency_fund: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    investments: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    monthly_expenses: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    savings_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0"))
    credit_score: Mapped[int] = mapped_column(Integer, nullable=False, default=650)

    # --- Aggregates ---
    total_quests_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_gold_earned: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


# ---------------------------------------------------------------------------
# Quests
# ---------------------------------------------------------------------------


class QuestCategory(Base):
    """Quest themes (budgeting, investing, ...)."""

    __tablename__ = "quest_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(16), nullable=True)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)


class Quest(Base):
    """Authored quiz content. Questions are stored inline as a JSON list."""

    __tablename__ = "quests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("quest_categories.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)
    min_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    xp_reward: Mapped[int] = mapped_column(Integer, nullable=False)
    gold_reward: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    questions: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    stat_rewards: Mapped[dict[str, int]] = mapped_column(JSONType, nullable=False, default=dict)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    category: Mapped[QuestCategory] = relationship("QuestCategory", lazy="joined")


class QuestProgress(Base):
    """One row per (character, quest); re-accepting resets it in place."""

    __tablename__ = "quest_progress"
    __table_args__ = (
        UniqueConstraint("character_id", "quest_id", name="uq_quest_progress_character_quest"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("characters.id", ondelete="CASCADE"), nullable=False
    )
    quest_id: Mapped[int] = mapped_column(Integer, ForeignKey("quests.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="accepted")
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    answers: Mapped[list[int]] = mapped_column(JSONType, nullable=False, default=list)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------


class Achievement(Base):
    """Achievement definitions, seeded on startup."""

    __tablename__ = "achievements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(16), nullable=True)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    rarity: Mapped[str] = mapped_column(String(16), nullable=False)
    condition_type: Mapped[str] = mapped_column(String(32), nullable=False)
    condition_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    xp_bonus: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gold_bonus: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))


class CharacterAchievement(Base):
    """Unlocked achievements: UNIQUE(character_id, achievement_id) prevents double unlocks."""

    __tablename__ = "character_achievements"
    __table_args__ = (
        UniqueConstraint("character_id", "achievement_id", name="uq_character_achievements_character_achievement"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("characters.id", ondelete="CASCADE"), nullable=False
    )
    achievement_id: Mapped[int] = mapped_column(Integer, ForeignKey("achievements.id"), nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    achievement: Mapped[Achievement] = relationship("Achievement", lazy="joined")


# ---------------------------------------------------------------------------
# Mini-games
# ---------------------------------------------------------------------------


class MiniGameScore(Base):
    """Append-only log of mini-game plays."""

    __tablename__ = "minigame_scores"
    __table_args__ = (
        CheckConstraint("score BETWEEN 0 AND 100", name="ck_minigame_scores_score_range"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("characters.id", ondelete="CASCADE"), nullable=False
    )
    game_type: Mapped[str] = mapped_column(String(32), nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    xp_awarded: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gold_awarded: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


# ---------------------------------------------------------------------------
# Activity log
# ---------------------------------------------------------------------------


class ActivityLog(Base):
    """Append-only audit trail of progression events, for display only."""

    __tablename__ = "activity_log"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    character_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("characters.id", ondelete="CASCADE"), nullable=False
    )
    action_type: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(String(256), nullable=False)
    xp_gained: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    gold_gained: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    activity_metadata: Mapped[dict[str, Any]] = mapped_column("metadata", JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
