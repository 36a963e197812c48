"""
Collision detection and magnetic snapping for manual repositioning.

Both functions work on one moving item against the rest of the load and
are cheap enough to run on every pointer move.

Collision rules:
    * no coordinate of the item's corner may be negative (nothing goes
      through the floor or behind the container origin);
    * the item may not overlap any other item by more than ``epsilon``.

No upper-bound check against the container is made: items
may sit on the staging shelf or be lifted above the load while moved.
"""

from __future__ import annotations

from collections.abc import Iterable

from cargo_planner.core.geometry import Box, overlaps_with_tolerance
from cargo_planner.core.models import CargoItem, ContainerConfig, Dimensions, Position

COLLISION_EPSILON: float = 1.0
SNAP_THRESHOLD: float = 150.0


def check_collision_at(
    box: Box,
    item_id: str,
    others: Iterable[CargoItem],
    epsilon: float = COLLISION_EPSILON,
) -> bool:
    """
    True if an item with id *item_id* occupying *box* would collide.

    Entries of *others* sharing *item_id* are skipped, so the full item
    list can be passed in.
    """
    if box.x < 0 or box.y < 0 or box.z < 0:
        return True

    for other in others:
        if other.id == item_id:
            continue
        if overlaps_with_tolerance(box, other.box, epsilon):
            return True
    return False


def check_collision(
    item: CargoItem,
    others: Iterable[CargoItem],
    container: ContainerConfig | None = None,
    epsilon: float = COLLISION_EPSILON,
) -> bool:
    """True if *item* at its current position collides with the floor/origin planes or another item.

    *container* is accepted for symmetry with the other entry points; no
    upper-bound containment is enforced.
    """
    return check_collision_at(item.box, item.id, others, epsilon)


def snap_position(
    position: Position,
    dims: Dimensions,
    others: Iterable[CargoItem],
    self_id: str,
    threshold: float = SNAP_THRESHOLD,
) -> Position:
    """
    Pull a candidate corner onto nearby alignment targets.

    Each axis snaps independently. A coordinate within *threshold* of zero
    first snaps to zero. Then, for every other item in list order:

        x:  my min → their max, my max → their min,
            my min → their min, my max → their max
        y:  my bottom → their top, my top → their bottom
        z:  same four rules as x

    Every rule tests the coordinate as already adjusted by earlier rules,
    and a later match overwrites an earlier one: the last qualifying
    neighbour wins, not the nearest.
    """
    x, y, z = position
    length, width, height = dims.length, dims.width, dims.height

    if abs(x) < threshold:
        x = 0.0
    if abs(y) < threshold:
        y = 0.0
    if abs(z) < threshold:
        z = 0.0

    for other in others:
        if other.id == self_id:
            continue

        ox, oy, oz = other.position
        ol = other.dimensions.length
        oh = other.dimensions.height
        ow = other.dimensions.width

        # x: face-to-face, then edge alignment
        if abs(x - (ox + ol)) < threshold:
            x = ox + ol
        if abs((x + length) - ox) < threshold:
            x = ox - length
        if abs(x - ox) < threshold:
            x = ox
        if abs((x + length) - (ox + ol)) < threshold:
            x = ox + ol - length

        # y: stack on top of, or tuck under
        if abs(y - (oy + oh)) < threshold:
            y = oy + oh
        if abs((y + height) - oy) < threshold:
            y = oy - height

        # z: face-to-face, then edge alignment
        if abs(z - (oz + ow)) < threshold:
            z = oz + ow
        if abs((z + width) - oz) < threshold:
            z = oz - width
        if abs(z - oz) < threshold:
            z = oz
        if abs((z + width) - (oz + ow)) < threshold:
            z = oz + ow - width

    return (x, y, z)


def refresh_validity(
    items: Iterable[CargoItem],
    container: ContainerConfig | None = None,
    epsilon: float = COLLISION_EPSILON,
) -> list[CargoItem]:
    """
    Return copies of *items* whose ``valid`` flag reflects the current layout.

    An item is invalid when it collides with any other item or lies below
    a zero plane.
    """
    items = list(items)
    return [
        item.copy(valid=not check_collision(item, items, container, epsilon))
        for item in items
    ]
