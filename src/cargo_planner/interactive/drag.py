"""
Resolving one pointer-move step of a manual drag.

The presentation layer turns pointer motion into a raw corner position
for the dragged item; :func:`resolve_drag` turns that into the position
the item should actually take:

    1. round the raw corner to the drag grid;
    2. lock the axes the current mode does not move
       (horizontal mode keeps y, lift mode keeps x and z);
    3. snap to nearby faces;
    4. accept the snapped corner if it is collision-free;
    5. in horizontal mode, otherwise try sliding along x only, then
       along z only, so an item can glide along a wall it touches.

``None`` means the item stays where it is.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from cargo_planner.config import InteractionConfig
from cargo_planner.core.geometry import Box
from cargo_planner.core.models import CargoItem, ContainerConfig, Position
from cargo_planner.interactive.collision import check_collision_at, snap_position


def quantize(value: float, step: float) -> float:
    """Round *value* to the nearest multiple of *step*, halves rounding up."""
    return math.floor(value / step + 0.5) * step


def _is_free(item: CargoItem, corner: Position, others: Sequence[CargoItem], epsilon: float) -> bool:
    d = item.dimensions
    box = Box(corner[0], corner[1], corner[2], d.length, d.height, d.width)
    return not check_collision_at(box, item.id, others, epsilon)


def resolve_drag(
    item: CargoItem,
    raw_corner: Position,
    others: Sequence[CargoItem],
    container: ContainerConfig | None = None,
    vertical: bool = False,
    config: Optional[InteractionConfig] = None,
) -> Optional[Position]:
    """
    Compute where *item* should move for a raw drag target.

    Args:
        item:       The dragged item at its last accepted position.
        raw_corner: Unsnapped target corner from the pointer.
        others:     All items in the scene (the item itself is skipped).
        container:  Load space (no upper bound is enforced).
        vertical:   Lift mode: only y follows the pointer.
        config:     Grid step, snap threshold and collision tolerance.

    Returns:
        The accepted corner, or ``None`` if no collision-free move exists.
    """
    cfg = config or InteractionConfig()
    cur_x, cur_y, cur_z = item.position

    x, y, z = (quantize(v, cfg.grid_step) for v in raw_corner)
    if vertical:
        x, z = cur_x, cur_z
    else:
        y = cur_y

    snapped = snap_position((x, y, z), item.dimensions, others, item.id, cfg.snap_threshold)
    if _is_free(item, snapped, others, cfg.collision_epsilon):
        return snapped

    if vertical:
        return None

    sx, _, sz = snapped
    for fallback in ((sx, cur_y, cur_z), (cur_x, cur_y, sz)):
        if _is_free(item, fallback, others, cfg.collision_epsilon):
            return fallback
    return None


def move_item(
    items: Sequence[CargoItem],
    item_id: str,
    position: Position,
    container: ContainerConfig | None = None,
) -> list[CargoItem]:
    """
    Return a copy of *items* with *item_id* moved to *position*.

    The moved item's ``valid`` flag is recomputed against the others.
    """
    moved: list[CargoItem] = []
    for item in items:
        if item.id != item_id:
            moved.append(item)
            continue
        d = item.dimensions
        box = Box(position[0], position[1], position[2], d.length, d.height, d.width)
        moved.append(item.copy(
            position=position,
            valid=not check_collision_at(box, item_id, items),
        ))
    return moved
