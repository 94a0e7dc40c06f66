"""Quest and mini-game reward formula tests."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from finquest.exceptions import InvalidInputError
from finquest.progression.quest_scoring import ScoreResult
from finquest.progression.rewards import (
    calculate_minigame_reward,
    calculate_rewards,
    difficulty_multiplier,
    minigame_multiplier,
)


def quest(difficulty="beginner", xp=100, gold="50", stats=None):
    return SimpleNamespace(
        difficulty=difficulty,
        xp_reward=xp,
        gold_reward=Decimal(gold),
        stat_rewards=stats if stats is not None else {"wisdom": 2, "discipline": 1},
    )


def score(percentage: int, passed: bool = True) -> ScoreResult:
    return ScoreResult(correct=0, total=0, percentage=percentage, passed=passed)


class TestQuestRewards:
    def test_beginner_full_marks(self):
        rewards = calculate_rewards(quest(), score(100))
        assert rewards.xp == 100
        assert rewards.gold == Decimal("50.00")
        assert rewards.perfect_bonus

    def test_score_multiplier_scales_linearly(self):
        rewards = calculate_rewards(quest(), score(60))
        assert rewards.xp == 60
        assert rewards.gold == Decimal("30.00")
        assert not rewards.perfect_bonus

    @pytest.mark.parametrize(
        ("difficulty", "base_xp", "base_gold", "percentage", "xp", "gold"),
        [
            ("intermediate", 150, "75", 100, 187, "93.75"),
            ("advanced", 200, "100", 80, 240, "120.00"),
            ("expert", 300, "150", 100, 600, "300.00"),
        ],
    )
    def test_difficulty_multipliers(self, difficulty, base_xp, base_gold, percentage, xp, gold):
        rewards = calculate_rewards(quest(difficulty, base_xp, base_gold), score(percentage))
        assert rewards.xp == xp
        assert rewards.gold == Decimal(gold)

    def test_gold_rounds_half_up_to_cents(self):
        rewards = calculate_rewards(quest(gold="0.05"), score(50))
        assert rewards.gold == Decimal("0.03")

    def test_stats_only_on_pass(self):
        assert calculate_rewards(quest(), score(100)).stat_rewards == {"wisdom": 2, "discipline": 1}
        failed = calculate_rewards(quest(), score(40, passed=False))
        assert failed.stat_rewards == {}
        assert failed.xp == 40

    def test_unknown_stat_names_dropped(self):
        rewards = calculate_rewards(quest(stats={"wisdom": 1, "charisma": 5}), score(100))
        assert rewards.stat_rewards == {"wisdom": 1}

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(InvalidInputError):
            difficulty_multiplier("legendary")


class TestMiniGameRewards:
    def test_baseline_score_gives_base_reward(self):
        reward = calculate_minigame_reward("budget_balance", 50, level=1)
        assert reward.xp == 30
        assert reward.gold == Decimal("15.00")

    def test_multiplier_capped_at_two(self):
        assert minigame_multiplier(100) == Decimal(2)
        reward = calculate_minigame_reward("investment_sim", 100, level=1)
        assert reward.xp == 100
        assert reward.gold == Decimal("50.00")

    def test_fractional_multiplier(self):
        reward = calculate_minigame_reward("debt_payoff", 75, level=1)
        assert reward.xp == 52
        assert reward.gold == Decimal("27.00")

    def test_zero_score(self):
        reward = calculate_minigame_reward("compound_interest", 0, level=1)
        assert reward.xp == 0
        assert reward.gold == Decimal("0.00")

    def test_unknown_type_falls_back(self):
        reward = calculate_minigame_reward("mystery_game", 50, level=1)
        assert reward.xp == 25
        assert reward.gold == Decimal("12.00")

    def test_level_has_no_effect(self):
        assert calculate_minigame_reward("budget_balance", 80, level=1) == calculate_minigame_reward(
            "budget_balance", 80, level=50
        )

    @pytest.mark.parametrize("bad", [-1, 101, True])
    def test_out_of_range_score_rejected(self, bad):
        with pytest.raises(InvalidInputError):
            calculate_minigame_reward("budget_balance", bad, level=1)
