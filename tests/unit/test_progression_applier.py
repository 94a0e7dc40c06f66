"""Progression applier tests: rewards folded into a character row."""

from decimal import Decimal
from types import SimpleNamespace

from finquest.progression.applier import apply_progression, merge_level_ups
from finquest.progression.class_tiers import class_for_level
from finquest.progression.leveling import MAX_LEVEL, xp_required


def make_character(**overrides):
    values = {
        "level": 1,
        "xp": 0,
        "xp_to_next_level": 100,
        "class_name": "Financial Apprentice",
        "gold": Decimal("500.00"),
        "total_gold_earned": Decimal("0.00"),
        "wisdom": 1,
        "discipline": 1,
        "risk_tolerance": 1,
        "negotiation": 1,
        "updated_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestApplyProgression:
    def test_xp_below_threshold(self):
        character = make_character()
        result = apply_progression(character, 40)
        assert character.level == 1
        assert character.xp == 40
        assert not result.leveled_up
        assert character.updated_at is not None

    def test_gold_counts_toward_total_earned(self):
        character = make_character()
        apply_progression(character, 0, Decimal("12.50"))
        assert character.gold == Decimal("512.50")
        assert character.total_gold_earned == Decimal("12.50")

    def test_stat_rewards_added(self):
        character = make_character()
        apply_progression(character, 10, stat_rewards={"wisdom": 2, "negotiation": 1, "luck": 9})
        assert character.wisdom == 3
        assert character.negotiation == 2
        assert not hasattr(character, "luck")

    def test_multi_level_up_keeps_fields_consistent(self):
        character = make_character(xp=90)
        gained = 10 + xp_required(2) + xp_required(3) + 5
        result = apply_progression(character, gained)
        assert character.level == 4
        assert character.xp == 5
        assert character.xp_to_next_level == xp_required(4)
        assert character.class_name == class_for_level(4)
        assert [e.new_level for e in result.level_ups] == [2, 3, 4]

    def test_crossing_tier_updates_class(self):
        character = make_character(level=4, xp=xp_required(4) - 1, xp_to_next_level=xp_required(4))
        apply_progression(character, 1)
        assert character.level == 5
        assert character.class_name == "Money Squire"

    def test_max_level_banks_xp(self):
        character = make_character(level=MAX_LEVEL, xp=10, xp_to_next_level=0, class_name="Financial Grandmaster")
        result = apply_progression(character, 500)
        assert character.level == MAX_LEVEL
        assert character.xp == 510
        assert character.xp_to_next_level == 0
        assert not result.leveled_up


class TestMergeLevelUps:
    def test_none_when_nothing_leveled(self):
        character = make_character()
        first = apply_progression(character, 10)
        assert merge_level_ups(first, None) is None
        assert merge_level_ups() is None

    def test_concatenates_passes(self):
        character = make_character()
        first = apply_progression(character, 100)
        second = apply_progression(character, xp_required(2))
        merged = merge_level_ups(first, second)
        assert merged is not None
        assert [e.new_level for e in merged.level_ups] == [2, 3]
        assert merged.new_level == 3
        assert merged.remaining_xp == character.xp
