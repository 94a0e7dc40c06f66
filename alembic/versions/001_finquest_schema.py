"""FinQuest schema: characters, quests, achievements, mini-games, activity log.

Revision ID: 001_finquest_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_finquest_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Characters ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS characters (
            id BIGSERIAL PRIMARY KEY,
            user_id BIGINT UNIQUE NOT NULL,
            name VARCHAR(64) NOT NULL,
            level INTEGER NOT NULL DEFAULT 1,
            xp INTEGER NOT NULL DEFAULT 0,
            xp_to_next_level INTEGER NOT NULL DEFAULT 100,
            gold NUMERIC(12, 2) NOT NULL DEFAULT 500.00,
            class VARCHAR(64) NOT NULL DEFAULT 'Financial Apprentice',
            wisdom INTEGER NOT NULL DEFAULT 1,
            discipline INTEGER NOT NULL DEFAULT 1,
            risk_tolerance INTEGER NOT NULL DEFAULT 1,
            negotiation INTEGER NOT NULL DEFAULT 1,
            income NUMERIC(12, 2) NOT NULL DEFAULT 2000.00,
            net_worth NUMERIC(12, 2) NOT NULL DEFAULT 0,
            debt NUMERIC(12, 2) NOT NULL DEFAULT 1000.00,
            emergency_fund NUMERIC(12, 2) NOT NULL DEFAULT 0,
            investments NUMERIC(12, 2) NOT NULL DEFAULT 0,
            monthly_expenses NUMERIC(12, 2) NOT NULL DEFAULT 1500.00,
            savings_rate NUMERIC(5, 2) NOT NULL DEFAULT 5.00,
            credit_score INTEGER NOT NULL DEFAULT 650,
            total_quests_completed INTEGER NOT NULL DEFAULT 0,
            total_gold_earned NUMERIC(14, 2) NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_characters_level_range CHECK (level BETWEEN 1 AND 50),
            CONSTRAINT ck_characters_xp_non_negative CHECK (xp >= 0),
            CONSTRAINT ck_characters_gold_non_negative CHECK (gold >= 0),
            CONSTRAINT ck_characters_credit_score_range CHECK (credit_score BETWEEN 300 AND 850)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_characters_level ON characters(level DESC, xp DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_characters_net_worth ON characters(net_worth DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_characters_gold_earned ON characters(total_gold_earned DESC)")
    op.execute("CREATE INDEX IF NOT EXISTS idx_characters_quests ON characters(total_quests_completed DESC)")

    # --- Quest catalogue ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS quest_categories (
            id SERIAL PRIMARY KEY,
            name VARCHAR(64) UNIQUE NOT NULL,
            description TEXT,
            icon VARCHAR(16),
            color VARCHAR(16)
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS quests (
            id SERIAL PRIMARY KEY,
            slug VARCHAR(64) UNIQUE NOT NULL,
            category_id INTEGER NOT NULL REFERENCES quest_categories(id),
            title VARCHAR(128) NOT NULL,
            description TEXT NOT NULL,
            difficulty VARCHAR(16) NOT NULL,
            min_level INTEGER NOT NULL DEFAULT 1,
            xp_reward INTEGER NOT NULL,
            gold_reward NUMERIC(10, 2) NOT NULL,
            questions JSONB NOT NULL DEFAULT '[]',
            stat_rewards JSONB NOT NULL DEFAULT '{}',
            order_index INTEGER NOT NULL DEFAULT 0,
            is_active BOOLEAN NOT NULL DEFAULT true,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_quests_category ON quests(category_id)")

    # --- Quest progress ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS quest_progress (
            id BIGSERIAL PRIMARY KEY,
            character_id BIGINT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
            quest_id INTEGER NOT NULL REFERENCES quests(id),
            status VARCHAR(16) NOT NULL DEFAULT 'accepted',
            score INTEGER NOT NULL DEFAULT 0,
            attempts INTEGER NOT NULL DEFAULT 1,
            answers JSONB NOT NULL DEFAULT '[]',
            started_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            completed_at TIMESTAMPTZ,
            CONSTRAINT uq_quest_progress_character_quest UNIQUE (character_id, quest_id)
        )
    """)

    # --- Achievements ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS achievements (
            id SERIAL PRIMARY KEY,
            slug VARCHAR(64) UNIQUE NOT NULL,
            name VARCHAR(128) NOT NULL,
            description TEXT NOT NULL,
            icon VARCHAR(16),
            category VARCHAR(32) NOT NULL,
            rarity VARCHAR(16) NOT NULL,
            condition_type VARCHAR(32) NOT NULL,
            condition_value INTEGER NOT NULL DEFAULT 0,
            xp_bonus INTEGER NOT NULL DEFAULT 0,
            gold_bonus NUMERIC(10, 2) NOT NULL DEFAULT 0
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS character_achievements (
            id BIGSERIAL PRIMARY KEY,
            character_id BIGINT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
            achievement_id INTEGER NOT NULL REFERENCES achievements(id),
            unlocked_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_character_achievements_character_achievement UNIQUE (character_id, achievement_id)
        )
    """)

    # --- Mini-games ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS minigame_scores (
            id BIGSERIAL PRIMARY KEY,
            character_id BIGINT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
            game_type VARCHAR(32) NOT NULL,
            score INTEGER NOT NULL,
            data JSONB NOT NULL DEFAULT '{}',
            xp_awarded INTEGER NOT NULL DEFAULT 0,
            gold_awarded NUMERIC(10, 2) NOT NULL DEFAULT 0,
            played_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_minigame_scores_score_range CHECK (score BETWEEN 0 AND 100)
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_minigame_scores_character
        ON minigame_scores(character_id, played_at DESC)
    """)

    # --- Activity log ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS activity_log (
            id BIGSERIAL PRIMARY KEY,
            character_id BIGINT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
            action_type VARCHAR(32) NOT NULL,
            description VARCHAR(256) NOT NULL,
            xp_gained INTEGER NOT NULL DEFAULT 0,
            gold_gained NUMERIC(10, 2) NOT NULL DEFAULT 0,
            metadata JSONB NOT NULL DEFAULT '{}',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_activity_log_character
        ON activity_log(character_id, created_at DESC)
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS activity_log")
    op.execute("DROP TABLE IF EXISTS minigame_scores")
    op.execute("DROP TABLE IF EXISTS character_achievements")
    op.execute("DROP TABLE IF EXISTS achievements")
    op.execute("DROP TABLE IF EXISTS quest_progress")
    op.execute("DROP TABLE IF EXISTS quests")
    op.execute("DROP TABLE IF EXISTS quest_categories")
    op.execute("DROP TABLE IF EXISTS characters")
