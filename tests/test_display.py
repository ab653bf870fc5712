import pytest

from mazebuilder.exceptions import ConfigurationError
from mazebuilder.model.bounds import DimensionBounds
from mazebuilder.model.display import DisplayTier, TIERS, maximal_tier, select_tier, uncovered_by_tiers

TIER_1 = DisplayTier(font_size=18, rows=45, cols=76)
TIER_2 = DisplayTier(font_size=14, rows=60, cols=104)
TIER_3 = DisplayTier(font_size=12, rows=68, cols=120)


def test_fixed_tiers_in_order():
    assert TIERS == (TIER_1, TIER_2, TIER_3)


@pytest.mark.parametrize("width, height, expected", [
    (32, 15, TIER_1),
    (3, 3, TIER_1),
    (33, 15, TIER_2),
    (32, 16, TIER_2),
    (33, 16, TIER_2),
    (43, 28, TIER_2),
    (44, 10, TIER_3),
    (10, 29, TIER_3),
    (52, 33, TIER_3),
])
def test_first_matching_tier_wins(width, height, expected):
    assert select_tier(width, height) == expected


def test_boundary_is_exclusive():
    assert select_tier(33, 16) != TIER_1


def test_gap_without_bounds():
    assert select_tier(119, 32) is None
    assert select_tier(53, 10) is None
    assert select_tier(10, 34) is None


def test_gap_closed_by_bounds(wide_bounds):
    tier = select_tier(119, 32, wide_bounds)
    assert tier == maximal_tier(wide_bounds)
    # 2 * 33 + 2 rows, 2 * 120 + 16 columns
    assert tier == DisplayTier(font_size=8, rows=68, cols=256)


def test_bounds_do_not_change_fixed_tiers(wide_bounds):
    assert select_tier(25, 10, wide_bounds) == TIER_1


def test_outside_bounds_keeps_previous_tier(wide_bounds):
    assert select_tier(121, 10, wide_bounds) is None


def test_deterministic():
    assert all(select_tier(70, 20) == select_tier(70, 20) for _ in range(5))
    assert all(select_tier(40, 20) == TIER_2 for _ in range(5))


def test_maximal_tier_never_smaller_than_last_fixed_tier(classic_bounds):
    tier = maximal_tier(classic_bounds)
    assert tier.rows >= TIER_3.rows
    assert tier.cols >= TIER_3.cols


def test_uncovered_profiles(classic_bounds, wide_bounds):
    assert not uncovered_by_tiers(classic_bounds)
    assert uncovered_by_tiers(wide_bounds)


def test_bounds_invariants():
    with pytest.raises(ConfigurationError):
        DimensionBounds(min_width=10, min_height=3, max_width=5, max_height=33)
    with pytest.raises(ConfigurationError):
        DimensionBounds(min_width=0, min_height=3, max_width=5, max_height=33)
    with pytest.raises(ConfigurationError):
        DimensionBounds(min_width=3, min_height=3, max_width=5.5, max_height=33)


def test_bounds_for_field(classic_bounds):
    assert classic_bounds.for_field("width") == (3, 52)
    assert classic_bounds.for_field("height") == (3, 33)
    with pytest.raises(ValueError):
        classic_bounds.for_field("depth")
