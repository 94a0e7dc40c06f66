"""Leveling curve and XP rollover tests."""

import math

import pytest

from finquest.exceptions import InvalidInputError
from finquest.progression.leveling import (
    MAX_LEVEL,
    level_from_total_xp,
    level_table,
    process_level_up,
    xp_required,
    xp_to_next_level,
)


class TestXPRequired:
    """Per-level XP requirement."""

    def test_level_1_needs_100(self):
        assert xp_required(1) == 100

    def test_matches_formula(self):
        for level in (2, 3, 10, 25, 49):
            assert xp_required(level) == math.floor(100 * 1.15 ** (level - 1))

    def test_strictly_increasing(self):
        values = [xp_required(level) for level in range(1, MAX_LEVEL + 1)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_level_zero_rejected(self):
        with pytest.raises(InvalidInputError):
            xp_required(0)

    def test_next_level_zero_at_max(self):
        assert xp_to_next_level(MAX_LEVEL) == 0
        assert xp_to_next_level(MAX_LEVEL - 1) == xp_required(MAX_LEVEL - 1)


class TestLevelFromTotalXP:
    """Absolute level from lifetime XP."""

    def test_zero_xp_is_level_1(self):
        assert level_from_total_xp(0) == 1

    def test_boundary(self):
        assert level_from_total_xp(99) == 1
        assert level_from_total_xp(100) == 2
        assert level_from_total_xp(100 + xp_required(2)) == 3

    def test_capped_at_max(self):
        assert level_from_total_xp(10**12) == MAX_LEVEL

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            level_from_total_xp(-1)


class TestProcessLevelUp:
    """Banked XP rollover."""

    def test_below_threshold_no_level_up(self):
        result = process_level_up(99, 1)
        assert result.new_level == 1
        assert result.remaining_xp == 99
        assert result.level_ups == []
        assert not result.leveled_up

    def test_exact_threshold_levels_up_with_zero_remaining(self):
        result = process_level_up(100, 1)
        assert result.new_level == 2
        assert result.remaining_xp == 0
        assert result.xp_to_next_level == xp_required(2)
        assert [e.new_level for e in result.level_ups] == [2]

    def test_multi_level_jump_emits_each_level_in_order(self):
        xp = xp_required(1) + xp_required(2) + xp_required(3) + 7
        result = process_level_up(xp, 1)
        assert result.new_level == 4
        assert result.remaining_xp == 7
        assert [e.new_level for e in result.level_ups] == [2, 3, 4]

    def test_class_changes_at_tier_threshold(self):
        result = process_level_up(xp_required(4), 4)
        assert result.new_level == 5
        assert result.new_class == "Money Squire"
        assert result.level_ups[0].new_class == "Money Squire"

    def test_remaining_always_below_requirement(self):
        for xp in (0, 50, 1_000, 25_000):
            result = process_level_up(xp, 1)
            if result.new_level < MAX_LEVEL:
                assert result.remaining_xp < xp_required(result.new_level)

    def test_max_level_retains_xp(self):
        result = process_level_up(5_000, MAX_LEVEL)
        assert result.new_level == MAX_LEVEL
        assert result.remaining_xp == 5_000
        assert result.xp_to_next_level == 0
        assert result.level_ups == []

    def test_huge_xp_stops_at_max_level(self):
        result = process_level_up(10**12, 1)
        assert result.new_level == MAX_LEVEL
        assert len(result.level_ups) == MAX_LEVEL - 1
        assert result.new_class == "Financial Grandmaster"

    def test_invalid_inputs(self):
        with pytest.raises(InvalidInputError):
            process_level_up(-1, 1)
        with pytest.raises(InvalidInputError):
            process_level_up(0, 0)
        with pytest.raises(InvalidInputError):
            process_level_up(0, MAX_LEVEL + 1)


class TestLevelTable:
    def test_fifty_rows_with_cumulative(self):
        table = level_table()
        assert len(table) == MAX_LEVEL
        assert table[0] == {"level": 1, "title": "Financial Apprentice", "xp_required": 100, "cumulative": 0}
        assert table[1]["cumulative"] == 100
        assert table[-1]["xp_required"] == 0
