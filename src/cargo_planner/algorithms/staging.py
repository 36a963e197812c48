"""Shelf layout of items waiting outside the container."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from cargo_planner.config import StagingConfig
from cargo_planner.core.models import CargoItem, ContainerConfig


def arrange_staging(
    items: Sequence[CargoItem],
    container: ContainerConfig,
    config: Optional[StagingConfig] = None,
) -> list[CargoItem]:
    """
    Lay *items* out on the floor beside the container, left to right.

    Rows run along x starting at x = 0; the first row sits ``offset``
    beyond the container's far z face. A row wraps when the next item would
    end past ``row_width_limit``, and the next row starts after the deepest
    (largest width) item of the previous one plus ``spacing``. An empty row
    never wraps, so an item longer than ``row_width_limit`` gets a row of its
    own and never leaves an empty row behind.

    Returns:
        Copies of *items*, in the same order, positioned and flagged valid.
    """
    cfg = config or StagingConfig()
    current_x = 0.0
    current_z = container.width + cfg.offset
    row_depth = 0.0

    staged: list[CargoItem] = []
    for item in items:
        dims = item.dimensions
        if current_x > 0 and current_x + dims.length > cfg.row_width_limit:
            current_x = 0.0
            current_z += row_depth + cfg.spacing
            row_depth = 0.0

        staged.append(item.copy(position=(current_x, 0.0, current_z), valid=True))
        current_x += dims.length + cfg.spacing
        row_depth = max(row_depth, dims.width)

    return staged
