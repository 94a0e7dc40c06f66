"""Class tiers: cosmetic label derived purely from level."""

from __future__ import annotations

from types import MappingProxyType

# Minimum level -> tier label, ascending.
CLASS_TIERS: MappingProxyType[int, str] = MappingProxyType({
    1: "Financial Apprentice",
    5: "Money Squire",
    10: "Finance Adept",
    15: "Savings Knight",
    20: "Budget Warrior",
    25: "Market Strategist",
    30: "Portfolio Architect",
    35: "Investment Sage",
    40: "Wealth Sovereign",
    45: "Financial Grandmaster",
})


def class_for_level(level: int) -> str:
    """Return the tier of the highest threshold <= level."""
    label = CLASS_TIERS[1]
    for threshold, tier in CLASS_TIERS.items():
        if level >= threshold:
            label = tier
    return label
