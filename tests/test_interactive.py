"""
Tests for manual repositioning: collision, snapping and drag resolution.

Tests cover:
- Collision boundaries at exact tangency and just inside the tolerance
- Negative coordinates always collide
- Snapping to zero planes and to neighbour faces
- Sequential last-match-wins snapping
- Drag pipeline: grid, axis locks, wall sliding, rejection
- Validity refresh after moves
"""

import pytest

from cargo_planner.config import InteractionConfig
from cargo_planner.core.models import Dimensions
from cargo_planner.interactive.collision import check_collision, refresh_validity, snap_position
from cargo_planner.interactive.drag import move_item, quantize, resolve_drag


@pytest.fixture
def neighbour(make_item):
    """150-unit cube in the container corner."""
    return make_item("n", 150, 150, 150)


class TestCheckCollision:
    @pytest.mark.parametrize("x,expected", [
        (150.0, False),   # flush against the neighbour's face
        (149.5, False),   # penetration below the 1-unit tolerance
        (149.0, False),   # exactly at the tolerance
        (148.0, True),
        (0.0, True),
    ])
    def test_tangency_boundary(self, make_item, neighbour, x, expected):
        item = make_item("m", 500, 500, 500, position=(x, 0, 0))
        assert check_collision(item, [neighbour, item]) is expected

    def test_flush_with_origin_is_free(self, make_item):
        assert check_collision(make_item("m", 100, 100, 100), []) is False

    @pytest.mark.parametrize("position", [(-1, 0, 0), (0, -0.5, 0), (0, 0, -10)])
    def test_negative_coordinates_collide(self, make_item, position):
        assert check_collision(make_item("m", 100, 100, 100, position=position), []) is True

    def test_no_upper_bound_check(self, make_item, cube_container):
        far = make_item("m", 100, 100, 100, position=(5000, 5000, 5000))
        assert check_collision(far, [], cube_container) is False

    def test_item_ignores_itself(self, make_item):
        item = make_item("m", 100, 100, 100)
        assert check_collision(item, [item]) is False


class TestSnapPosition:
    def test_snaps_to_neighbour_far_face_not_zero(self, neighbour):
        dims = Dimensions(500, 500, 500)
        assert snap_position((152, 0, 0), dims, [neighbour], "m", 150) == (150, 0, 0)

    def test_snaps_small_coordinates_to_zero(self):
        assert snap_position((100, 149, -20), Dimensions(10, 10, 10), [], "m") == (0, 0, 0)

    def test_threshold_is_strict(self):
        assert snap_position((150, 0, 0), Dimensions(10, 10, 10), [], "m") == (150, 0, 0)

    def test_stacks_on_top(self, neighbour):
        # my bottom is 30 above the neighbour's top
        snapped = snap_position((0, 180, 0), Dimensions(500, 500, 500), [neighbour], "m")
        assert snapped[1] == 150

    def test_last_matching_neighbour_wins(self, make_item):
        lower = make_item("lower", 100, 100, 490)                          # top at 490
        upper = make_item("upper", 100, 100, 100, position=(0, 700, 0))    # bottom at 700
        snapped = snap_position((5000, 500, 5000), Dimensions(100, 100, 100), [lower, upper], "m")
        # lower pulls y to 490 first, then my top (590) is within reach of upper's bottom
        assert snapped == (5000, 600, 5000)

    def test_skips_self(self, make_item):
        me = make_item("m", 100, 100, 100, position=(1000, 1000, 1000))
        assert snap_position((1010, 1000, 1000), me.dimensions, [me], "m") == (1010, 1000, 1000)


class TestQuantize:
    @pytest.mark.parametrize("value,expected", [
        (12.4, 10.0),
        (12.5, 15.0),
        (2.5, 5.0),
        (-2.5, 0.0),
        (-2.6, -5.0),
        (100.0, 100.0),
    ])
    def test_half_up(self, value, expected):
        assert quantize(value, 5.0) == expected


class TestResolveDrag:
    def test_horizontal_move_keeps_height(self, make_item):
        item = make_item("m", 500, 500, 500)
        assert resolve_drag(item, (2003, 777, 3002), [item]) == (2005, 0, 3000)

    def test_lift_keeps_x_and_z(self, make_item):
        item = make_item("m", 500, 500, 500, position=(1000, 0, 1000))
        assert resolve_drag(item, (3000, 402, 3000), [item], vertical=True) == (1000, 400, 1000)

    def test_slides_along_wall(self, make_item):
        item = make_item("m", 500, 500, 500)
        wall = make_item("wall", 2000, 500, 500, position=(0, 0, 1000))
        # (600, 0, 800) cuts into the wall; sliding along x only is free
        assert resolve_drag(item, (600, 0, 800), [item, wall]) == (600, 0, 0)

    def test_falls_back_to_z_slide(self, make_item):
        item = make_item("m", 500, 500, 500)
        block = make_item("block", 2000, 3000, 500, position=(1000, 0, 0))
        # x-only slide still hits the block, z-only slide is free
        assert resolve_drag(item, (1200, 0, 400), [item, block]) == (0, 0, 400)

    def test_blocked_lift_returns_none(self, make_item):
        item = make_item("m", 500, 500, 500)
        ceiling = make_item("c", 500, 500, 500, position=(0, 600, 0))
        assert resolve_drag(item, (0, 650, 0), [item, ceiling], vertical=True) is None

    def test_custom_grid(self, make_item):
        item = make_item("m", 100, 100, 100)
        cfg = InteractionConfig(grid_step=100.0, snap_threshold=0.0)
        assert resolve_drag(item, (1049, 0, 1051), [item], config=cfg) == (1000, 0, 1100)


class TestValidity:
    def test_move_item_flags_overlap(self, make_item):
        a = make_item("a", 500, 500, 500)
        b = make_item("b", 500, 500, 500, position=(2000, 0, 0))
        moved = move_item([a, b], "b", (100, 0, 0))
        assert moved[0] is a
        assert moved[1].position == (100, 0, 0)
        assert moved[1].valid is False
        assert b.position == (2000, 0, 0)

    def test_refresh_validity(self, make_item):
        a = make_item("a", 500, 500, 500)
        b = make_item("b", 500, 500, 500, position=(100, 0, 0))
        c = make_item("c", 500, 500, 500, position=(3000, 0, 0), valid=False)
        refreshed = refresh_validity([a, b, c])
        assert [i.valid for i in refreshed] == [False, False, True]
        assert c.valid is False
