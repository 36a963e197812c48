"""
Tests for placement scoring.

Tests cover:
- Gravity priority: floor-level spaces beat raised ones
- Depth before left-right among floor spaces
- Unrotated orientation first, rotation when needed
- Strict tie-breaking in free-space order
- No feasible space returns None
"""

import pytest

from cargo_planner.algorithms.scorer import find_best_placement, fits, score_space
from cargo_planner.config import PackingConfig
from cargo_planner.core.geometry import Box
from cargo_planner.core.models import Dimensions


class TestScore:
    def test_height_dominates(self):
        assert score_space(Box(999, 0, 999, 1, 1, 1)) < score_space(Box(0, 1, 0, 1, 1, 1))

    def test_depth_before_x(self):
        assert score_space(Box(999, 0, 0, 1, 1, 1)) < score_space(Box(0, 0, 1, 1, 1, 1))

    def test_custom_weights(self):
        assert score_space(Box(1, 2, 3, 1, 1, 1), (100.0, 10.0, 1.0)) == 231.0


class TestFindBestPlacement:
    def test_floor_space_chosen_over_raised(self):
        spaces = [
            Box(0, 600, 0, 1000, 400, 1000),
            Box(0, 0, 600, 1000, 1000, 400),
            Box(600, 0, 0, 400, 1000, 1000),
        ]
        candidate = find_best_placement(Dimensions(300, 300, 300), spaces)
        assert candidate is not None
        assert candidate.space.y == 0
        assert candidate.space == Box(600, 0, 0, 400, 1000, 1000)
        assert candidate.space_index == 2

    def test_unrotated_preferred_when_both_fit(self):
        candidate = find_best_placement(Dimensions(300, 200, 100), [Box(0, 0, 0, 1000, 1000, 1000)])
        assert candidate.rotated is False
        assert candidate.dimensions == Dimensions(300, 200, 100)

    def test_rotation_used_when_needed(self):
        candidate = find_best_placement(Dimensions(300, 900, 100), [Box(0, 0, 0, 1000, 1000, 400)])
        assert candidate.rotated is True
        assert candidate.dimensions == Dimensions(900, 300, 100)
        assert candidate.placed_box == Box(0, 0, 0, 900, 100, 300)

    def test_height_never_rotates(self):
        assert find_best_placement(Dimensions(100, 100, 500), [Box(0, 0, 0, 1000, 400, 1000)]) is None

    def test_equal_scores_keep_first_space(self):
        spaces = [Box(0, 0, 0, 100, 100, 100), Box(0, 0, 0, 200, 200, 200)]
        assert find_best_placement(Dimensions(50, 50, 50), spaces).space_index == 0

    def test_no_space_returns_none(self):
        assert find_best_placement(Dimensions(10, 10, 10), []) is None

    def test_weights_come_from_config(self):
        spaces = [Box(0, 100, 0, 500, 500, 500), Box(0, 0, 100, 500, 500, 500)]
        cfg = PackingConfig(score_weights=(1.0, 1000.0, 1.0))
        assert find_best_placement(Dimensions(10, 10, 10), spaces, cfg).space_index == 0


@pytest.mark.parametrize("dims,space,expected", [
    (Dimensions(100, 100, 100), Box(0, 0, 0, 100, 100, 100), True),
    (Dimensions(101, 100, 100), Box(0, 0, 0, 100, 100, 100), False),
    (Dimensions(100, 100, 101), Box(0, 0, 0, 100, 100, 100), False),
])
def test_fits(dims, space, expected):
    assert fits(dims, space) is expected
