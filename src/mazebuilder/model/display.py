"""
Display Sizer
=============
Maps a requested maze size to the font size and text area geometry used to
show it.

The fixed tiers are checked in order and the first one whose thresholds are
strictly above both dimensions wins. The thresholds are independent of any
bounds profile, so a profile that admits wider mazes than the last tier
(e.g. 120 x 33) falls through all of them. Passing the bounds to
`select_tier` closes that gap with a tier derived from the profile itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mazebuilder.model.bounds import DimensionBounds

MAXIMAL_FONT_SIZE = 8


@dataclass(frozen=True)
class DisplayTier:
    font_size: int
    rows: int
    cols: int


@dataclass(frozen=True)
class _TierRule:
    width_below: int
    height_below: int
    tier: DisplayTier

    def matches(self, width: int, height: int) -> bool:
        return width < self.width_below and height < self.height_below


TIER_RULES: tuple[_TierRule, ...] = (
    _TierRule(33, 16, DisplayTier(font_size=18, rows=45, cols=76)),
    _TierRule(44, 29, DisplayTier(font_size=14, rows=60, cols=104)),
    _TierRule(53, 34, DisplayTier(font_size=12, rows=68, cols=120)),
)

TIERS: tuple[DisplayTier, ...] = tuple(rule.tier for rule in TIER_RULES)


def maximal_tier(bounds: DimensionBounds) -> DisplayTier:
    """
    Tier large enough for the biggest maze a bounds profile admits.

    A maze of W x H cells prints as 2 * H + 1 lines of at most 2 * W + 14
    characters (wall row plus the "start"/"finish" labels).
    """
    last = TIERS[-1]
    rows = max(last.rows, 2 * bounds.max_height + 2)
    cols = max(last.cols, 2 * bounds.max_width + 16)
    return DisplayTier(font_size=MAXIMAL_FONT_SIZE, rows=rows, cols=cols)


def select_tier(width: int, height: int, bounds: Optional[DimensionBounds] = None) -> Optional[DisplayTier]:
    """
    Picks the display tier for a maze of the given size.

    Args:
        width: Requested maze width in cells.
        height: Requested maze height in cells.
        bounds: Active bounds profile. When given, sizes inside the bounds
            that exceed every fixed tier get `maximal_tier(bounds)`.

    Returns:
        The tier to apply, or None when the display should keep its
        current tier.
    """
    for rule in TIER_RULES:
        if rule.matches(width, height):
            return rule.tier
    if bounds is not None and bounds.contains(width, height):
        return maximal_tier(bounds)
    return None


def uncovered_by_tiers(bounds: DimensionBounds) -> bool:
    """True if the profile admits sizes that no fixed tier matches."""
    return select_tier(bounds.max_width, bounds.max_height) is None
