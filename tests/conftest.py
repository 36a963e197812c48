"""Shared fixtures for the planner test suite."""

import pytest

from cargo_planner.core.models import CargoItem, ContainerConfig, Dimensions


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@pytest.fixture
def cube_container():
    """1000 x 1000 x 1000 container with a 100 kg rating."""
    return ContainerConfig(name="Cube", length=1000.0, width=1000.0, height=1000.0, max_weight=100.0)


@pytest.fixture
def small_container():
    """900 x 900 x 450 container: room for at most 162 units of 150 x 150 x 100."""
    return ContainerConfig(name="Small", length=900.0, width=900.0, height=450.0)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

@pytest.fixture
def make_item():
    """Factory for items: make_item(id, length, width, height, position=..., ...)."""

    def _make(item_id, length, width, height, position=(0.0, 0.0, 0.0),
              weight=0.0, valid=True, drawing_no="DRW"):
        return CargoItem(
            id=item_id,
            drawing_no=drawing_no,
            dimensions=Dimensions(length=float(length), width=float(width), height=float(height)),
            position=tuple(float(v) for v in position),
            weight=float(weight),
            valid=valid,
        )

    return _make


@pytest.fixture
def eight_cubes(make_item):
    """Eight 500-unit cubes: exactly fill the cube container."""
    return [make_item(f"cube-{i}", 500, 500, 500) for i in range(8)]
