"""Single-item manual repositioning: collision checks, snapping and drag resolution."""

from .collision import (
    COLLISION_EPSILON,
    SNAP_THRESHOLD,
    check_collision,
    check_collision_at,
    refresh_validity,
    snap_position,
)
from .drag import move_item, quantize, resolve_drag

__all__ = [
    "COLLISION_EPSILON",
    "SNAP_THRESHOLD",
    "check_collision",
    "check_collision_at",
    "refresh_validity",
    "snap_position",
    "move_item",
    "quantize",
    "resolve_drag",
]
