"""Class tier resolution tests."""

import pytest

from finquest.progression.class_tiers import CLASS_TIERS, class_for_level


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (1, "Financial Apprentice"),
        (4, "Financial Apprentice"),
        (5, "Money Squire"),
        (9, "Money Squire"),
        (10, "Finance Adept"),
        (24, "Budget Warrior"),
        (25, "Market Strategist"),
        (44, "Wealth Sovereign"),
        (45, "Financial Grandmaster"),
        (50, "Financial Grandmaster"),
    ],
)
def test_class_for_level(level, expected):
    assert class_for_level(level) == expected


def test_ten_tiers_ascending():
    thresholds = list(CLASS_TIERS)
    assert len(thresholds) == 10
    assert thresholds == sorted(thresholds)
    assert thresholds[0] == 1


def test_table_is_read_only():
    with pytest.raises(TypeError):
        CLASS_TIERS[50] = "Hacker"  # type: ignore[index]
